"""Pure vote-tally and rank computations."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from dodel.models import Vote, VoteState


def standing_votes(votes: Iterable[Vote]) -> dict[str, Vote]:
    """Return each voter's most recent vote, keyed by voter.

    ``votes`` must be in insertion order; later records replace earlier ones.
    """
    standing: dict[str, Vote] = {}
    for vote in votes:
        standing[vote.author] = vote
    return standing


def tally(votes: Iterable[Vote]) -> int:
    """Return upvoters minus downvoters, counting one standing vote per user."""
    return sum(vote.direction for vote in standing_votes(votes).values())


def vote_state(votes: Iterable[Vote], user: str) -> VoteState:
    """Return the direction of ``user``'s standing vote among ``votes``."""
    state = VoteState.NONE
    for vote in votes:
        if vote.author == user:
            state = VoteState.UP if vote.upvote else VoteState.DOWN
    return state


def compute_rank(created_at: datetime, net_votes: int, now: datetime) -> float:
    """Return the feed rank of a post; lower ranks sort first.

    Age pushes a post down quadratically in elapsed minutes while the vote
    lead pulls it up cubically.
    """
    elapsed = (now - created_at).total_seconds() / 60.0
    return elapsed * elapsed - float(net_votes) ** 3
