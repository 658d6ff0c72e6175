from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    build_dir: str = "build"
    downloads_subdir: str = "downloads"
    work_subdir: str = "_work"
    build_file: str = "build.yaml"
    log_default: str = "build/logs/elo-bs-manager.log"


PATHS = Paths()
