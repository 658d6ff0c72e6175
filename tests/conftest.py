from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pytest

from elo_bs_manager.installer import ScriptArguments, ScriptName
from elo_bs_manager.lib.command import CmdResult
from elo_bs_manager.lib.download import DownloadError
from elo_bs_manager.settings import BaseConfig


class RecordingInstaller:
    """Installer double that remembers every script run."""

    def __init__(self, calls: List[Tuple[BaseConfig, ScriptName, ScriptArguments]]):
        self.calls = calls
        self.base_config = None

    def set_base_config(self, config: BaseConfig) -> None:
        self.base_config = config

    def run(self, entrypoint: ScriptName, arguments: ScriptArguments) -> CmdResult:
        self.calls.append((self.base_config, entrypoint, arguments))
        return CmdResult(argv=[], returncode=0, stdout="", stderr="")


class FakeFetch:
    """Writes a small payload instead of downloading; URLs in ``failing`` raise."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls: List[Tuple[str, Path]] = []

    def __call__(self, url: str, destination: Path) -> Path:
        self.calls.append((url, destination))
        if url in self.failing:
            raise DownloadError(f"connection refused: {url}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(b"PK\x03\x04")
        return destination


@pytest.fixture
def credentials():
    return {
        "elo.server.ixUrl": "http://elo.example.com:9090/ix-Archive/ix",
        "elo.server.username": "Administrator",
        "elo.server.password": "elo",
    }


@pytest.fixture
def install_calls():
    return []


@pytest.fixture
def installer_factory(install_calls):
    return lambda: RecordingInstaller(install_calls)


@pytest.fixture
def fake_fetch():
    return FakeFetch()
