"""Custom exceptions for the authorship engine."""


class AuthorshipError(Exception):
    """Base exception for all authorship engine errors."""


class BlameUnavailable(AuthorshipError):
    """Raised when the VCS cannot produce per-line history for a file.

    The pipeline skips the file; it never aborts the run.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"blame unavailable for {path!r}: {reason}")


class SymbolGraphInconsistent(AuthorshipError):
    """Raised when a symbol or reference span does not fit its file."""

    def __init__(self, subject: str, reason: str):
        self.subject = subject
        self.reason = reason
        super().__init__(f"inconsistent symbol graph entry {subject}: {reason}")


class ProportionMismatch(AuthorshipError):
    """A symbol's author proportions do not sum to 1.0 within epsilon.

    Only ever logged; the symbol's records are emitted flagged ``inconsistent``.
    """

    def __init__(self, subject: str, total: float, chars: int, total_chars: int):
        self.subject = subject
        self.total = total
        self.chars = chars
        self.total_chars = total_chars
        super().__init__(
            f"proportions for {subject} sum to {total!r} "
            f"({chars} of {total_chars} chars attributed)"
        )


class AggregationIncomplete(AuthorshipError):
    """Raised when partial records are missing at reduction time.

    Fatal for the repository's rollup; retry by re-running the whole repository.
    """

    def __init__(self, repo: str, missing: list[str]):
        self.repo = repo
        self.missing = missing
        super().__init__(
            f"aggregation for {repo} is missing {len(missing)} partial(s): {missing}"
        )


class EmitterError(AuthorshipError):
    """Raised when an aggregate cannot be shaped into a record (programming error)."""
