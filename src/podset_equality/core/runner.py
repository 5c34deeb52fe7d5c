"""Subprocess wrapper with error handling."""

from __future__ import annotations

import logging
import subprocess

from podset_equality.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class RunError(Exception):
    """Raised when a subprocess cannot be started or exits non-zero."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Command {cmd!r} failed (exit {returncode}): {stderr.strip()}"
        )


def run(cmd: list[str], timeout: int = DEFAULT_TIMEOUT, stdin: str | None = None) -> str:
    """Run subprocess, capture stdout, raise RunError on failure."""
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=stdin,
        )
    except FileNotFoundError as e:
        raise RunError(cmd, 127, str(e)) from e
    except subprocess.TimeoutExpired as e:
        raise RunError(cmd, -1, f"timed out after {timeout}s") from e
    if result.returncode != 0:
        raise RunError(cmd, result.returncode, result.stderr)
    return result.stdout
