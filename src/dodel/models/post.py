# src/dodel/models/post.py
"""Post entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Post:
    """A user submission, either top-level or a comment on another post.

    Rank is not stored here; it is derived from ``created_at`` and the post's
    current votes whenever it is needed.
    """

    id: str
    author: str
    text: str
    color: str
    created_at: datetime
    # Parent post id for comments; top-level posts have parent = None.
    parent: str | None = None

    @property
    def is_comment(self) -> bool:
        """Return True when the post belongs to another post's thread."""
        return self.parent is not None
