"""Blame adapter — normalize VCS blame into per-line ownership ranges."""

from authorship.engines.blame.models import BlameEntry, BlameLine, FileBlame
from authorship.engines.blame.porcelain import normalize_blame, parse_porcelain
from authorship.engines.blame.provider import BlameProvider, GitBlameProvider

__all__ = [
    "BlameEntry",
    "BlameLine",
    "BlameProvider",
    "FileBlame",
    "GitBlameProvider",
    "normalize_blame",
    "parse_porcelain",
]
