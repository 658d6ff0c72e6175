from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Tuple

from .lib.env import PATHS

if TYPE_CHECKING:
    from .extension import BsManagerExtension
    from .project import Project

IX_URL_PROPERTY = "elo.server.ixUrl"
USERNAME_PROPERTY = "elo.server.username"
PASSWORD_PROPERTY = "elo.server.password"
LANGUAGE_PROPERTY = "elo.server.language"

REQUIRED_PROPERTIES = (IX_URL_PROPERTY, USERNAME_PROPERTY, PASSWORD_PROPERTY)


class ConfigurationError(ValueError):
    """Build configuration is incomplete; nothing has been downloaded yet."""


@dataclass(frozen=True)
class BaseConfig:
    """Connection settings handed to the script engine."""

    ix_url: str
    username: str
    password: str = field(repr=False)
    language: Optional[str] = None


def validate_properties(properties: Mapping[str, Any]) -> BaseConfig:
    """Check the server credentials, first missing one wins.

    Raises ConfigurationError naming the absent property.
    """

    for name in REQUIRED_PROPERTIES:
        if properties.get(name) is None:
            raise ConfigurationError(f"{name} is not set")

    language = properties.get(LANGUAGE_PROPERTY)
    return BaseConfig(
        ix_url=str(properties[IX_URL_PROPERTY]),
        username=str(properties[USERNAME_PROPERTY]),
        password=str(properties[PASSWORD_PROPERTY]),
        language=None if language is None else str(language),
    )


@dataclass(frozen=True)
class SetupConfig:
    """Everything the setup run reads, captured once at call time."""

    bs_urls: Optional[Tuple[str, ...]]
    properties: Mapping[str, Any]
    build_dir: Path = Path(PATHS.build_dir)

    @classmethod
    def create(
        cls,
        *,
        bs_urls: Optional[list[str] | tuple[str, ...]],
        properties: Mapping[str, Any],
        build_dir: Path | str = PATHS.build_dir,
    ) -> "SetupConfig":
        return cls(
            bs_urls=None if bs_urls is None else tuple(bs_urls),
            properties=MappingProxyType(dict(properties)),
            build_dir=Path(build_dir).resolve(),
        )

    @classmethod
    def from_project(cls, project: "Project", extension: "BsManagerExtension") -> "SetupConfig":
        return cls.create(
            bs_urls=extension.get_bs_urls(),
            properties=project.properties,
            build_dir=project.build_dir,
        )

    @property
    def downloads_dir(self) -> Path:
        return Path(self.build_dir).resolve() / PATHS.downloads_subdir

    @property
    def work_dir(self) -> Path:
        return Path(self.build_dir).resolve() / PATHS.work_subdir
