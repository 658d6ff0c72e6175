from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from .build_config import BuildConfig, configure_project, load_build_config, parse_property_overrides
from .extension import EXTENSION_NAME, BsManagerExtension
from .lib.env import PATHS
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .plugin import SETUP_TASK, apply
from .project import Project

logger = logging.getLogger(__name__)


def _load_config(path: str, *, explicit: bool) -> BuildConfig:
    if not explicit and not os.path.exists(path):
        logger.info("No build file at %s, using properties from the command line only", path)
        return BuildConfig(raw={})
    return load_build_config(path)


def build_project(
    *,
    config_path: str,
    config_explicit: bool,
    overrides: list[str],
    build_dir: Optional[str],
    dry_run: bool,
) -> Project:
    cfg = _load_config(config_path, explicit=config_explicit)
    project = configure_project(cfg, parse_property_overrides(overrides), build_dir=build_dir)

    apply(project, dry_run=dry_run)
    extension: BsManagerExtension = project.extensions.get_by_name(EXTENSION_NAME)
    extension.set_bs_urls(cfg.bs_urls)
    return project


def print_tasks(project: Project) -> None:
    for group, tasks in sorted(project.tasks.by_group().items()):
        print(f"{group.capitalize()} tasks")
        print("-" * (len(group) + 6))
        for t in tasks:
            print(f"{t.name} - {t.description}" if t.description else t.name)
        print()


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="elo-bs-manager")
    p.add_argument("tasks", nargs="*", default=[SETUP_TASK], help="Tasks to run in order")
    p.add_argument("--config", default=None, help=f"Build file (default: {PATHS.build_file})")
    p.add_argument(
        "-P",
        "--property",
        dest="properties",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a project property (e.g. -P elo.server.username=admin)",
    )
    p.add_argument("--build-dir", default=None, help="Override the build output directory")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    p.add_argument("--dry-run", action="store_true", help="Download packages but only log engine commands")
    p.add_argument("--list-tasks", action="store_true", help="List tasks and exit")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        project = build_project(
            config_path=args.config or PATHS.build_file,
            config_explicit=args.config is not None,
            overrides=args.properties,
            build_dir=args.build_dir,
            dry_run=bool(args.dry_run),
        )
        if args.list_tasks:
            print_tasks(project)
            return 0
        result = project.tasks.run(args.tasks)
        logger.info("BUILD SUCCESSFUL (%s)", ", ".join(result.ran_tasks))
    except Exception:
        logger.exception("Build failed")
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
