"""Bridge to the vendor script engine.

The engine is a closed runtime that knows how to unpack a business solution
package and deploy it to the server. We only start it with an entrypoint
script and positional arguments; its exit status is not interpreted.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Tuple

from .lib.command import CmdResult, run_cmd
from .settings import BaseConfig

logger = logging.getLogger(__name__)

ENGINE_COMMAND_PROPERTY = "elo.scriptEngine.command"
DEFAULT_ENGINE_COMMAND = "elo-script-runner"

# Root script module and the bundled installer scripts.
DEFAULT_SCRIPT_MODULES: Tuple[str, ...] = (".", "installer")

DEPLOY_ACTION = "deploy"


@dataclass(frozen=True)
class ScriptName:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ScriptArguments:
    values: Tuple[str, ...]

    @classmethod
    def of(cls, *values: Any) -> "ScriptArguments":
        return cls(values=tuple(str(v) for v in values))

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


INSTALL_ENTRYPOINT = ScriptName("sol.dev.sh.InstallPackages.js")


class Installer(Protocol):
    """Anything that can run an engine script against a configured server."""

    def set_base_config(self, config: BaseConfig) -> None:
        ...

    def run(self, entrypoint: ScriptName, arguments: ScriptArguments) -> CmdResult:
        ...


def engine_env(config: BaseConfig) -> Dict[str, str]:
    env = {
        "ELO_IX_URL": config.ix_url,
        "ELO_USERNAME": config.username,
        "ELO_PASSWORD": config.password,
    }
    if config.language:
        env["ELO_LANGUAGE"] = config.language
    return env


class ScriptWorker:
    """Runs the script engine as an external process."""

    def __init__(
        self,
        engine_command: Sequence[str],
        *,
        modules: Sequence[str] = DEFAULT_SCRIPT_MODULES,
        dry_run: bool = False,
    ) -> None:
        if not engine_command:
            raise ValueError("engine command must not be empty")
        self.engine_command = list(engine_command)
        self.modules = list(modules)
        self.dry_run = dry_run
        self.base_config: Optional[BaseConfig] = None

    def set_base_config(self, config: BaseConfig) -> None:
        self.base_config = config

    def build_argv(self, entrypoint: ScriptName, arguments: ScriptArguments) -> list[str]:
        argv = list(self.engine_command)
        for m in self.modules:
            argv += ["--module", m]
        argv.append(str(entrypoint))
        argv += list(arguments)
        return argv

    def run(self, entrypoint: ScriptName, arguments: ScriptArguments) -> CmdResult:
        if self.base_config is None:
            raise RuntimeError("base config must be set before running a script")

        result = run_cmd(
            self.build_argv(entrypoint, arguments),
            env=engine_env(self.base_config),
            dry_run=self.dry_run,
        )
        logger.debug("Script %s finished with exit code %d", entrypoint, result.returncode)
        return result


def provide_installer(properties: Mapping[str, Any], *, dry_run: bool = False) -> ScriptWorker:
    command = properties.get(ENGINE_COMMAND_PROPERTY) or DEFAULT_ENGINE_COMMAND
    return ScriptWorker(shlex.split(str(command)), dry_run=dry_run)
