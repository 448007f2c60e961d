# src/dodel/api/v1/endpoints/posts.py
"""Post-related endpoints for the Dodel API."""

from datetime import timedelta

from fastapi import APIRouter, Query, status

from dodel.api.v1.dependencies import StoreDep
from dodel.core.settings import settings
from dodel.schemas.post import CommentThread, PostCreate, PostCreated, PostView
from dodel.schemas.vote import VoteOut
from dodel.services.post_service import build_thread, to_post_view, to_vote_out

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostCreated)
def create_post(post_data: PostCreate, store: StoreDep) -> PostCreated:
    """Submit a new post, or a comment when ``topic`` names a parent post."""
    post_id = store.submit_post(
        post_data.user,
        post_data.text,
        post_data.color,
        post_data.topic,
    )
    return PostCreated(id=post_id)


@router.get("", response_model=list[PostView])
def list_posts(
    store: StoreDep,
    limit: int | None = Query(None, ge=1, le=100),
    max_age_hours: float | None = Query(None, gt=0),
    min_rank: float | None = Query(None),
) -> list[PostView]:
    """Return the ranked feed of recent top-level posts."""
    feed = store.feed_summaries(
        limit=limit if limit is not None else settings.feed_limit,
        max_age=(
            timedelta(hours=max_age_hours) if max_age_hours is not None else settings.feed_max_age
        ),
        min_rank=min_rank if min_rank is not None else settings.feed_min_rank,
    )
    return [to_post_view(summary, feed.now) for summary in feed.summaries]


@router.get("/{post_id}", response_model=CommentThread)
def get_post(post_id: str, store: StoreDep) -> CommentThread:
    """Return a post together with its comment thread."""
    return build_thread(store, post_id)


@router.get("/{post_id}/comments", response_model=list[PostView])
def get_post_comments(post_id: str, store: StoreDep) -> list[PostView]:
    """Return the comments on a post, oldest first."""
    thread = store.thread_summaries(post_id)
    return [to_post_view(summary, thread.now) for summary in thread.comments]


@router.get("/{post_id}/votes", response_model=list[VoteOut])
def get_post_votes(post_id: str, store: StoreDep) -> list[VoteOut]:
    """Return every vote cast on a post, including superseded ones."""
    store.get_post(post_id)
    return [to_vote_out(vote) for vote in store.list_votes(post_id)]
