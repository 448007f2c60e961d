# src/dodel/models/vote.py
"""Models capturing voting interactions on posts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class VoteState(str, Enum):
    """The stance a user currently holds on a post."""

    NONE = "none"
    UP = "upvote"
    DOWN = "downvote"


@dataclass(frozen=True, slots=True)
class Vote:
    """A single vote record.

    Votes are append-only. When a user votes on the same post more than once,
    only the most recent record counts towards the tally.
    """

    post_id: str
    author: str
    upvote: bool
    cast_at: datetime

    @property
    def direction(self) -> int:
        """Return 1 for an upvote and -1 for a downvote."""
        return 1 if self.upvote else -1
