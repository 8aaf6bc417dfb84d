"""``git blame --porcelain`` parsing and blame normalization."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import groupby

from authorship.engines.blame.models import BlameEntry, BlameLine, FileBlame
from authorship.exceptions import BlameUnavailable

_HEX = frozenset("0123456789abcdef")


def _is_sha(token: str) -> bool:
    return len(token) == 40 and all(c in _HEX for c in token)


def _parse_tz(raw: str) -> timezone:
    """Parse a git ``+HHMM`` / ``-HHMM`` offset."""
    if len(raw) != 5 or raw[0] not in "+-" or not raw[1:].isdigit():
        return timezone.utc
    sign = -1 if raw[0] == "-" else 1
    delta = timedelta(hours=int(raw[1:3]), minutes=int(raw[3:5]))
    return timezone(sign * delta)


def _commit_date(info: dict[str, str]) -> datetime:
    # Prefer the committer timestamp; fall back to the author's.
    for prefix in ("committer", "author"):
        stamp = info.get(f"{prefix}-time")
        if stamp is not None and stamp.lstrip("-").isdigit():
            tz = _parse_tz(info.get(f"{prefix}-tz", "+0000"))
            return datetime.fromtimestamp(int(stamp), tz=tz)
    return datetime.fromtimestamp(0, tz=timezone.utc)


def _clean_email(raw: str) -> str:
    email = raw.strip()
    if email.startswith("<") and email.endswith(">"):
        email = email[1:-1]
    return email.strip().lower()


def parse_porcelain(raw: str) -> list[BlameLine]:
    """Parse ``git blame --porcelain`` output into per-line records.

    Header fields are only printed the first time a commit appears, so they
    are remembered per sha and reused for later lines of the same commit.
    """
    lines = raw.split("\n")
    records: list[BlameLine] = []
    commits: dict[str, dict[str, str]] = {}

    i = 0
    while i < len(lines):
        parts = lines[i].split()
        i += 1
        # Each blamed line starts with: <sha> <orig_line> <final_line> [<num_lines>]
        if len(parts) < 3 or not _is_sha(parts[0]):
            continue
        sha = parts[0]
        final_line = int(parts[2])

        info = commits.setdefault(sha, {})
        content: str | None = None
        while i < len(lines):
            hline = lines[i]
            i += 1
            if hline.startswith("\t"):
                content = hline[1:]
                break
            key, _, value = hline.partition(" ")
            info.setdefault(key, value)

        if content is None:
            raise ValueError(f"truncated porcelain output at line {final_line}")

        records.append(
            BlameLine(
                line=final_line,
                commit_id=sha,
                author_email=_clean_email(info.get("author-mail", "")),
                commit_date=_commit_date(info),
                content=content,
            )
        )
    return records


def normalize_blame(path: str, commit: str, lines: list[BlameLine]) -> FileBlame:
    """Turn per-line blame into ordered, gap-free :class:`BlameEntry` ranges.

    Raises :class:`BlameUnavailable` when the lines do not cover 1..N exactly
    once, or when the content looks binary.
    """
    ordered = sorted(lines, key=lambda bl: bl.line)
    for expected, bl in enumerate(ordered, start=1):
        if bl.line != expected:
            kind = "overlap" if bl.line < expected else "gap"
            raise BlameUnavailable(path, f"{kind} in blame at line {expected}")
        if "\x00" in bl.content:
            raise BlameUnavailable(path, "binary content")

    offsets = [0]
    for bl in ordered:
        # Every line is counted with its terminating newline.
        offsets.append(offsets[-1] + len(bl.content) + 1)

    entries: list[BlameEntry] = []
    line_no = 1
    for _, group in groupby(ordered, key=lambda bl: bl.commit_id):
        run = list(group)
        first = run[0]
        entries.append(
            BlameEntry(
                start_line=line_no,
                end_line=line_no + len(run) - 1,
                author_email=first.author_email,
                commit_id=first.commit_id,
                commit_date=first.commit_date,
            )
        )
        line_no += len(run)

    return FileBlame(
        path=path,
        commit=commit,
        entries=tuple(entries),
        line_offsets=tuple(offsets),
    )
