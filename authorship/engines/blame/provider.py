"""Blame providers — the VCS side of the blame adapter."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from authorship.engines.blame.models import FileBlame
from authorship.engines.blame.porcelain import normalize_blame, parse_porcelain
from authorship.exceptions import BlameUnavailable

logger = logging.getLogger(__name__)


class BlameProvider(ABC):
    """Produces normalized per-line ownership for a file at a ceiling commit."""

    @abstractmethod
    async def blame(self, path: str, commit: str) -> FileBlame:
        """Return blame covering every line of *path* at *commit*.

        Raises :class:`BlameUnavailable` if per-line history cannot be produced.
        """
        ...


class GitBlameProvider(BlameProvider):
    """Runs ``git blame --porcelain`` against a local checkout."""

    def __init__(self, repo_path: str | Path, git: str = "git") -> None:
        self.repo_path = Path(repo_path)
        self.git = git

    async def blame(self, path: str, commit: str) -> FileBlame:
        cmd = [self.git, "-C", str(self.repo_path), "blame", "--porcelain", commit, "--", path]
        logger.debug("Running git blame for %s@%s", path, commit)
        raw = await self._run(cmd, path)
        try:
            lines = parse_porcelain(raw)
        except ValueError as exc:
            raise BlameUnavailable(path, str(exc)) from exc
        return normalize_blame(path, commit, lines)

    @staticmethod
    async def _run(cmd: list[str], path: str) -> str:
        """Run a git command and return stdout, raising BlameUnavailable on failure."""
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise BlameUnavailable(path, f"cannot run git: {exc}") from exc

        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            # Timed out or cancelled by the caller: kill git and reap it.
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
                await proc.wait()
            raise

        if proc.returncode != 0:
            # git echoes raw path bytes, which need not be UTF-8.
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise BlameUnavailable(path, f"git blame failed (exit {proc.returncode}): {detail}")
        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BlameUnavailable(path, "binary content") from exc
