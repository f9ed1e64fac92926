"""Exception taxonomy for the path engine.

A missing path is not an exception: search returns ``None`` and the
service layer reports ``NOT_FOUND``. These types cover the failures that
must stay distinguishable from it.
"""

from __future__ import annotations


class SixDegreesError(Exception):
    """Base class for all sixdegrees errors."""


class LookupFailedError(SixDegreesError):
    """A catalog read failed while resolving people or works.

    Raised by catalog adapters (wrapping the store error) and propagated
    unchanged through adjacency and search. Never retried internally.
    """

    def __init__(self, message: str, *, person_id: int | None = None) -> None:
        super().__init__(message)
        self.person_id = person_id


class PathValidationError(SixDegreesError, ValueError):
    """A cached path violates its write invariants.

    Indicates a logic defect upstream of the cache, not a user error.
    """

    def __init__(self, message: str, *, from_id: int, to_id: int, path: list[int]) -> None:
        super().__init__(message)
        self.from_id = from_id
        self.to_id = to_id
        self.path = path


class CacheError(SixDegreesError):
    """The path cache could not be read or written."""


class CacheWriteError(CacheError):
    """Persisting a computed path failed."""
