from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _log_stream(label: str, text: str) -> None:
    for line in text.splitlines():
        if line.strip():
            logger.debug("%s %s", label, line)


def run_cmd(
    argv: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run an external program and hand back its exit status.

    The command line is logged; ``env`` is merged into the process
    environment but never logged. A non-zero exit is reported in the
    result, not raised. In dry-run mode nothing is started.
    """

    argv_list = [str(a) for a in argv]
    logger.info("CMD %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    p = subprocess.run(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=dict(os.environ, **(env or {})),
    )

    _log_stream("STDOUT", p.stdout or "")
    _log_stream("STDERR", p.stderr or "")
    if p.returncode != 0:
        logger.warning("%s exited with status %d", argv_list[0], p.returncode)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")
