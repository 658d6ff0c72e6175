"""Minimal build host: properties, build directory, extensions and tasks.

Plugins receive a ``Project`` in ``apply()`` and register their extension
objects and tasks on it. The CLI then runs the requested tasks in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

from .lib.env import PATHS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnknownTaskError(KeyError):
    pass


class ExtensionContainer:
    def __init__(self) -> None:
        self._by_name: Dict[str, Any] = {}

    def create(self, name: str, cls: Type[T]) -> T:
        if name in self._by_name:
            raise ValueError(f"Extension already exists: {name}")
        ext = cls()
        self._by_name[name] = ext
        return ext

    def get_by_name(self, name: str) -> Any:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Extension not found: {name}") from None

    def get_by_type(self, cls: Type[T]) -> T:
        for ext in self._by_name.values():
            if isinstance(ext, cls):
                return ext
        raise KeyError(f"Extension of type {cls.__name__} not found")


TaskAction = Callable[["Task"], None]


@dataclass
class Task:
    name: str
    group: Optional[str] = None
    description: Optional[str] = None
    actions: List[TaskAction] = field(default_factory=list)

    def do_last(self, action: TaskAction) -> "Task":
        self.actions.append(action)
        return self

    def set_group(self, group: str) -> "Task":
        self.group = group
        return self

    def execute(self) -> None:
        for action in self.actions:
            action(self)


@dataclass(frozen=True)
class TaskRunResult:
    ran_tasks: List[str]


class TaskContainer:
    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}

    def register(self, name: str) -> Task:
        if name in self._tasks:
            raise ValueError(f"Task already exists: {name}")
        task = Task(name=name)
        self._tasks[name] = task
        return task

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def by_group(self) -> Dict[str, List[Task]]:
        groups: Dict[str, List[Task]] = {}
        for task in self._tasks.values():
            groups.setdefault(task.group or "other", []).append(task)
        return groups

    def run(self, names: Sequence[str]) -> TaskRunResult:
        """Run tasks in the given order. Unknown names fail before anything runs."""

        tasks = [self.get(n) for n in names]
        ran: List[str] = []
        for task in tasks:
            logger.info("> Task :%s", task.name)
            task.execute()
            ran.append(task.name)
        return TaskRunResult(ran_tasks=ran)


class Project:
    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        build_dir: Path | str = PATHS.build_dir,
    ) -> None:
        self.properties: Dict[str, Any] = dict(properties or {})
        self.build_dir = Path(build_dir)
        self.extensions = ExtensionContainer()
        self.tasks = TaskContainer()

    def task(self, name: str) -> Task:
        return self.tasks.register(name)
