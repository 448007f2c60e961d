"""In-memory post/vote store.

This module provides the PostStore class, the single owner of every post and
vote the service knows about. It includes:

- Post submission and vote casting with input validation
- Standing-vote tallies, karma and on-demand rank computation
- Feed listing and comment threading
- Whole-state export and replacement for snapshot persistence

All collections are guarded by one lock. Public methods acquire it exactly
once; helpers prefixed with ``_`` expect the caller to hold it.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from threading import Lock

from dodel.core.settings import VotePolicy
from dodel.db.time import utcnow
from dodel.models import Post, Vote, VoteState
from dodel.services import ranking
from dodel.services.errors import AlreadyVotedError, InvalidInputError, NotFoundError

# Configure logger for this module
logger = logging.getLogger(__name__)

# Defaults used by list_feed
DEFAULT_LIST_COUNT = 30
DEFAULT_MAX_AGE = timedelta(hours=24)
DEFAULT_MIN_RANK = -5.0


@dataclass
class StoreState:
    """A detached copy of the store's collections in insertion order."""

    posts: list[Post] = field(default_factory=list)
    votes: list[Vote] = field(default_factory=list)


@dataclass(frozen=True)
class StoreStats:
    """Collection sizes reported by the status endpoint."""

    posts: int
    comments: int
    votes: int


@dataclass(frozen=True)
class PostSummary:
    """A post together with metrics derived in the same locked pass."""

    post: Post
    votes: int
    comments: int
    rank: float


@dataclass(frozen=True)
class FeedView:
    """Feed summaries and the timestamp their ranks were computed at."""

    now: datetime
    summaries: list[PostSummary]


@dataclass(frozen=True)
class ThreadView:
    """A post and its comments, all summarized at the same timestamp."""

    now: datetime
    post: PostSummary
    comments: list[PostSummary]


class PostStore:
    """Holds posts and votes and serves derived views over them."""

    def __init__(
        self,
        *,
        policy: VotePolicy = VotePolicy.OVERWRITE,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize an empty store.

        Args:
            policy: Repeat-voting policy applied by cast_vote.
            clock: Source of the current time; must return aware datetimes.
        """
        self.policy = policy
        self._clock = clock
        self._lock = Lock()
        self._posts: list[Post] = []
        self._votes: list[Vote] = []
        self._posts_by_id: dict[str, Post] = {}
        self._votes_by_post: dict[str, list[Vote]] = {}
        self._comments_by_parent: dict[str, list[Post]] = {}

    # --- Mutations ------------------------------------------------------------------
    def submit_post(
        self,
        author: str,
        text: str,
        color: str = "",
        parent: str | None = None,
    ) -> str:
        """Add a new post and return its id.

        Raises:
            InvalidInputError: If author or text is empty after trimming.
            NotFoundError: If parent is given but does not exist.
        """
        author = (author or "").strip()
        text = (text or "").strip()
        color = (color or "").strip()
        parent = (parent or "").strip() or None
        if not author or not text:
            raise InvalidInputError("Can not submit empty post")

        with self._lock:
            if parent is not None and parent not in self._posts_by_id:
                raise NotFoundError(f"Parent post {parent} not found")
            post = Post(
                id=self._new_id(),
                author=author,
                text=text,
                color=color,
                created_at=self._clock(),
                parent=parent,
            )
            self._index_post(post)

        logger.debug("Added post %s by %s (parent=%s)", post.id, author, parent)
        return post.id

    def cast_vote(self, user: str, post_id: str, is_upvote: bool) -> int:
        """Record a vote and return the post's new net vote count.

        Raises:
            InvalidInputError: If user is empty after trimming.
            NotFoundError: If the post does not exist.
            AlreadyVotedError: Under the strict policy, if the user already voted.
        """
        user = (user or "").strip()
        if not user:
            raise InvalidInputError("Vote needs an author")

        with self._lock:
            self._require_post(post_id)
            if self.policy is VotePolicy.STRICT and (
                self._vote_state(post_id, user) is not VoteState.NONE
            ):
                raise AlreadyVotedError(f"User {user} already voted on post {post_id}")
            vote = Vote(post_id=post_id, author=user, upvote=bool(is_upvote), cast_at=self._clock())
            self._index_vote(vote)
            count = self._net_votes(post_id)

        logger.debug(
            "Recorded %s on post %s by %s, net votes now %d",
            "upvote" if vote.upvote else "downvote",
            post_id,
            user,
            count,
        )
        return count

    # --- Derived reads --------------------------------------------------------------
    def get_post(self, post_id: str) -> Post:
        """Return the post with the given id or raise NotFoundError."""
        with self._lock:
            return self._require_post(post_id)

    def vote_state(self, post_id: str, user: str) -> VoteState:
        """Return the direction of the user's standing vote on a post."""
        with self._lock:
            return self._vote_state(post_id, user)

    def net_votes(self, post_id: str) -> int:
        """Return upvoters minus downvoters for a post."""
        with self._lock:
            return self._net_votes(post_id)

    def comment_count(self, post_id: str) -> int:
        """Return the number of posts whose parent is post_id."""
        with self._lock:
            return len(self._comments_by_parent.get(post_id, ()))

    def karma(self, user: str) -> int:
        """Return the sum of net votes over every post authored by user."""
        with self._lock:
            return sum(self._net_votes(post.id) for post in self._posts if post.author == user)

    def rank(self, post_id: str) -> float:
        """Return the post's rank computed at the current time."""
        with self._lock:
            post = self._require_post(post_id)
            return self._rank(post, self._clock())

    def list_votes(self, post_id: str) -> list[Vote]:
        """Return every vote cast on a post, superseded ones included."""
        with self._lock:
            return list(self._votes_by_post.get(post_id, ()))

    def list_feed(
        self,
        limit: int = DEFAULT_LIST_COUNT,
        max_age: timedelta = DEFAULT_MAX_AGE,
        min_rank: float = DEFAULT_MIN_RANK,
    ) -> list[Post]:
        """Return recent top-level posts ordered by ascending rank.

        Ranks are computed against a single timestamp taken under the lock, and
        posts with equal rank keep their insertion order.
        """
        return [summary.post for summary in self.feed_summaries(limit, max_age, min_rank).summaries]

    def feed_summaries(
        self,
        limit: int = DEFAULT_LIST_COUNT,
        max_age: timedelta = DEFAULT_MAX_AGE,
        min_rank: float = DEFAULT_MIN_RANK,
    ) -> FeedView:
        """Return the feed with each post's counts and rank.

        Filtering, ordering and the reported numbers all come from the same
        locked pass and the same timestamp.
        """
        with self._lock:
            now = self._clock()
            if limit <= 0:
                return FeedView(now=now, summaries=[])
            candidates: list[PostSummary] = []
            for post in self._posts:
                # Post is a comment
                if post.parent is not None:
                    continue
                # Post is too old
                if now - post.created_at > max_age:
                    continue
                summary = self._summary(post, now)
                # Post ranks too low
                if summary.rank < min_rank:
                    continue
                candidates.append(summary)

        candidates.sort(key=lambda summary: summary.rank)
        return FeedView(now=now, summaries=candidates[:limit])

    def list_comments(self, post_id: str) -> list[Post]:
        """Return the comments on a post, oldest first."""
        with self._lock:
            comments = list(self._comments_by_parent.get(post_id, ()))
        comments.sort(key=lambda post: post.created_at)
        return comments

    def summarize(self, posts: Iterable[Post]) -> list[PostSummary]:
        """Return vote and comment counts plus rank for each post."""
        with self._lock:
            now = self._clock()
            return [self._summary(post, now) for post in posts]

    def thread_summaries(self, post_id: str) -> ThreadView:
        """Return a post and its comments, oldest first, summarized together.

        Raises:
            NotFoundError: If the post does not exist.
        """
        with self._lock:
            now = self._clock()
            post = self._require_post(post_id)
            comments = sorted(
                self._comments_by_parent.get(post_id, ()),
                key=lambda comment: comment.created_at,
            )
            return ThreadView(
                now=now,
                post=self._summary(post, now),
                comments=[self._summary(comment, now) for comment in comments],
            )

    def stats(self) -> StoreStats:
        """Return collection sizes."""
        with self._lock:
            comments = sum(1 for post in self._posts if post.parent is not None)
            return StoreStats(posts=len(self._posts), comments=comments, votes=len(self._votes))

    def now(self) -> datetime:
        """Return the store clock's current time."""
        return self._clock()

    # --- Whole-state access for persistence -----------------------------------------
    def export_state(self) -> StoreState:
        """Return a detached copy of all posts and votes."""
        with self._lock:
            return StoreState(posts=list(self._posts), votes=list(self._votes))

    def replace_state(self, state: StoreState) -> None:
        """Replace every post and vote with the given state.

        Indexes are rebuilt from scratch before the lock is released, so no
        reader observes a partially loaded store.
        """
        with self._lock:
            self._posts = []
            self._votes = []
            self._posts_by_id = {}
            self._votes_by_post = {}
            self._comments_by_parent = {}
            for post in state.posts:
                self._index_post(post)
            for vote in state.votes:
                self._index_vote(vote)

        logger.debug(
            "Replaced store state with %d posts and %d votes",
            len(state.posts),
            len(state.votes),
        )

    # --- Internal helpers (lock held) -----------------------------------------------
    def _new_id(self) -> str:
        while True:
            post_id = str(uuid.uuid4())
            if post_id not in self._posts_by_id:
                return post_id

    def _index_post(self, post: Post) -> None:
        self._posts.append(post)
        self._posts_by_id[post.id] = post
        if post.parent is not None:
            self._comments_by_parent.setdefault(post.parent, []).append(post)

    def _index_vote(self, vote: Vote) -> None:
        self._votes.append(vote)
        self._votes_by_post.setdefault(vote.post_id, []).append(vote)

    def _require_post(self, post_id: str) -> Post:
        post = self._posts_by_id.get(post_id)
        if post is None:
            raise NotFoundError(f"Post {post_id} not found")
        return post

    def _vote_state(self, post_id: str, user: str) -> VoteState:
        return ranking.vote_state(self._votes_by_post.get(post_id, ()), user)

    def _net_votes(self, post_id: str) -> int:
        return ranking.tally(self._votes_by_post.get(post_id, ()))

    def _rank(self, post: Post, now: datetime) -> float:
        return ranking.compute_rank(post.created_at, self._net_votes(post.id), now)

    def _summary(self, post: Post, now: datetime) -> PostSummary:
        votes = self._net_votes(post.id)
        return PostSummary(
            post=post,
            votes=votes,
            comments=len(self._comments_by_parent.get(post.id, ())),
            rank=ranking.compute_rank(post.created_at, votes, now),
        )
