"""Service-level helpers for presenting posts."""
from __future__ import annotations

from datetime import datetime

from dodel.db.time import to_unix
from dodel.models import Vote
from dodel.schemas.post import CommentThread, PostView
from dodel.schemas.vote import VoteOut
from dodel.services.store import PostStore, PostSummary
from dodel.utils.humanize import human_time


def to_post_view(summary: PostSummary, now: datetime) -> PostView:
    """Convert a post summary to an API schema."""
    post = summary.post
    return PostView(
        id=post.id,
        topic=post.parent,
        user=post.author,
        text=post.text,
        color=post.color,
        timestamp=to_unix(post.created_at),
        votes=summary.votes,
        comments=summary.comments,
        rank=summary.rank,
        age=human_time(post.created_at, now),
    )


def to_vote_out(vote: Vote) -> VoteOut:
    """Convert a vote record to an API schema."""
    return VoteOut(
        user=vote.author,
        post=vote.post_id,
        upvote=vote.upvote,
        time=to_unix(vote.cast_at),
    )


def build_thread(store: PostStore, post_id: str) -> CommentThread:
    """Return a post and its comments as a single API schema.

    Raises:
        NotFoundError: If the post does not exist.
    """
    thread = store.thread_summaries(post_id)
    return CommentThread(
        **to_post_view(thread.post, thread.now).model_dump(),
        comments_list=[to_post_view(summary, thread.now) for summary in thread.comments],
    )
