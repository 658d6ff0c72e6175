from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .extension import EXTENSION_NAME
from .lib.env import PATHS
from .project import Project


@dataclass(frozen=True)
class BuildConfig:
    raw: Dict[str, Any]

    @property
    def build_dir(self) -> str:
        return str(self.raw.get("buildDir") or PATHS.build_dir)

    @property
    def properties(self) -> Dict[str, Any]:
        props = self.raw.get("properties") or {}
        if not isinstance(props, dict):
            raise ValueError("'properties' must be a mapping of name: value")
        return {str(k): v for k, v in props.items()}

    def extension(self, name: str) -> Dict[str, Any]:
        ext = self.raw.get(name) or {}
        if not isinstance(ext, dict):
            raise ValueError(f"'{name}' must be a mapping")
        return ext

    @property
    def bs_urls(self) -> Optional[List[str]]:
        urls = self.extension(EXTENSION_NAME).get("bsUrls")
        if urls is None:
            return None
        if isinstance(urls, str) or not isinstance(urls, list):
            raise ValueError(f"'{EXTENSION_NAME}.bsUrls' must be a list of URLs")
        return [str(u) for u in urls]


def load_build_config(path: str) -> BuildConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("build file must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    return BuildConfig(raw=raw)


def parse_property_overrides(items: Sequence[str]) -> Dict[str, str]:
    """``-P name=value`` style overrides; the value may itself contain '='."""

    out: Dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Property override must look like name=value, got {item!r}")
        out[name] = value
    return out


def configure_project(
    cfg: BuildConfig,
    overrides: Optional[Mapping[str, str]] = None,
    build_dir: Optional[str] = None,
) -> Project:
    properties = cfg.properties
    properties.update(overrides or {})
    return Project(properties=properties, build_dir=build_dir or cfg.build_dir)
