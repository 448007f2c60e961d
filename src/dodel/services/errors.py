"""Error taxonomy raised by the post/vote store.

Every failure the store reports derives from :class:`StoreError` so callers
can catch the family at once, while the concrete subclasses stay
distinguishable for mapping onto user-facing responses.
"""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base exception raised for store failures."""


class InvalidInputError(StoreError, ValueError):
    """Raised when a required field is empty after trimming."""


class NotFoundError(StoreError, LookupError):
    """Raised when a referenced post or parent post does not exist."""


class AlreadyVotedError(StoreError):
    """Raised under the strict policy when a user votes on a post twice."""


class PersistenceError(StoreError):
    """Raised when a snapshot cannot be read, decoded or written."""
