from __future__ import annotations

import logging

from .extension import EXTENSION_NAME, BsManagerExtension
from .installer import provide_installer
from .orchestrator import setup_business_solutions
from .project import Project, Task
from .settings import SetupConfig

logger = logging.getLogger(__name__)

TASK_GROUP = "elo"
SETUP_TASK = "setupBusinessSolutions"


def apply(project: Project, *, dry_run: bool = False) -> BsManagerExtension:
    """Register the ``elobsmanager`` extension and the setup task."""

    extension = project.extensions.create(EXTENSION_NAME, BsManagerExtension)

    def _setup(task: Task) -> None:
        ext = project.extensions.get_by_type(BsManagerExtension)
        config = SetupConfig.from_project(project, ext)
        setup_business_solutions(
            config,
            installer_factory=lambda: provide_installer(config.properties, dry_run=dry_run),
        )

    task = project.task(SETUP_TASK).do_last(_setup).set_group(TASK_GROUP)
    task.description = "Downloads the configured business solutions and installs them on the ELO server."
    return extension
