# core/exceptions.py
from typing import Optional


class ShowcaseError(Exception):
    """Base class for errors raised by the showcase core."""


# ========================================
# 💾 Store errors (not recoverable by the client)
# ========================================
class StoreError(ShowcaseError):
    pass


class StoreReadError(StoreError):
    """The backing store is missing, unreachable or holds a corrupt document."""


class StoreWriteError(StoreError):
    """The backing store refused the updated record list."""


# ========================================
# 📝 Submission errors (fixable by the submitter)
# ========================================
class UnknownTagError(ShowcaseError, ValueError):
    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unknown tag: {tag}")


class SubmissionRejected(ShowcaseError):
    """A submission body failed the server-side check."""

    def __init__(self, reason: str, field: Optional[str] = None):
        self.reason = reason
        self.field = field
        super().__init__(reason)
