"""JSON snapshot persistence for the post/vote store.

The snapshot is a single document holding every post and vote in insertion
order. Saving copies the store's state under its lock and then encodes and
writes outside of it; loading decodes first and swaps the result into the
store in one step.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections import Counter, defaultdict
from pathlib import Path

from pydantic import ValidationError

from dodel.db.time import from_unix, to_unix
from dodel.models import Post, Vote
from dodel.schemas.snapshot import SnapshotDocument, SnapshotPost, SnapshotVote
from dodel.services import ranking
from dodel.services.errors import PersistenceError
from dodel.services.store import PostStore, StoreState

# Configure logger for this module
logger = logging.getLogger(__name__)


def encode_state(state: StoreState) -> SnapshotDocument:
    """Convert store state into a snapshot document.

    Vote and comment counts are derived from ``state`` itself so the document
    is internally consistent.
    """
    votes_by_post: dict[str, list[Vote]] = defaultdict(list)
    for vote in state.votes:
        votes_by_post[vote.post_id].append(vote)
    comment_counts = Counter(post.parent for post in state.posts if post.parent is not None)

    return SnapshotDocument(
        posts=[
            SnapshotPost(
                id=post.id,
                topic=post.parent or "",
                user=post.author,
                text=post.text,
                color=post.color,
                timestamp=to_unix(post.created_at),
                votes=ranking.tally(votes_by_post.get(post.id, ())),
                comments=comment_counts.get(post.id, 0),
            )
            for post in state.posts
        ],
        votes=[
            SnapshotVote(
                user=vote.author,
                post=vote.post_id,
                upvote=vote.upvote,
                time=to_unix(vote.cast_at),
            )
            for vote in state.votes
        ],
    )


def decode_document(document: SnapshotDocument) -> StoreState:
    """Convert a snapshot document back into store state.

    Raises:
        PersistenceError: If post ids repeat or a timestamp is out of range.
    """
    seen: set[str] = set()
    posts: list[Post] = []
    try:
        for entry in document.posts:
            if entry.id in seen:
                raise PersistenceError(f"Duplicate post id {entry.id} in snapshot")
            seen.add(entry.id)
            posts.append(
                Post(
                    id=entry.id,
                    author=entry.user,
                    text=entry.text,
                    color=entry.color,
                    created_at=from_unix(entry.timestamp),
                    parent=entry.topic or None,
                )
            )
        votes = [
            Vote(
                post_id=entry.post,
                author=entry.user,
                upvote=entry.upvote,
                cast_at=from_unix(entry.time),
            )
            for entry in document.votes
        ]
    except (OverflowError, OSError, ValueError) as exc:
        raise PersistenceError(f"Invalid timestamp in snapshot: {exc}") from exc
    return StoreState(posts=posts, votes=votes)


class SnapshotStore:
    """Reads and writes store snapshots at a fixed path."""

    def __init__(self, path: str | os.PathLike[str], *, allow_missing: bool = True) -> None:
        """Initialize the snapshot location.

        Args:
            path: Snapshot file location.
            allow_missing: Start with an empty store when the file is absent
                instead of failing.
        """
        self.path = Path(path)
        self.allow_missing = allow_missing

    def load(self, store: PostStore) -> bool:
        """Replace the store's state with the snapshot's contents.

        Returns:
            True if a snapshot was loaded, False if the store was left empty
            because the file is missing and that is allowed.

        Raises:
            PersistenceError: If the file cannot be read or decoded, or is
                missing while ``allow_missing`` is off.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            if not self.allow_missing:
                raise PersistenceError(f"Snapshot {self.path} not found") from exc
            logger.warning("Snapshot %s not found, starting with an empty store", self.path)
            store.replace_state(StoreState())
            return False
        except OSError as exc:
            raise PersistenceError(f"Could not read snapshot {self.path}: {exc}") from exc

        try:
            document = SnapshotDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(f"Could not decode snapshot {self.path}: {exc}") from exc

        state = decode_document(document)
        store.replace_state(state)
        logger.info(
            "Loaded %d posts and %d votes from %s",
            len(state.posts),
            len(state.votes),
            self.path,
        )
        return True

    def save(self, store: PostStore) -> None:
        """Write the store's current state to the snapshot file.

        The document is written to a temporary file next to the target and
        moved into place, so readers never see a partially written snapshot.

        Raises:
            PersistenceError: If the snapshot cannot be written.
        """
        state = store.export_state()
        payload = encode_state(state).model_dump_json()

        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise PersistenceError(f"Could not write snapshot {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        logger.info(
            "Saved %d posts and %d votes to %s",
            len(state.posts),
            len(state.votes),
            self.path,
        )

    def checkpoint(self, store: PostStore) -> bool:
        """Save the store, logging instead of raising on failure.

        Returns:
            True if the snapshot was written.
        """
        try:
            self.save(store)
        except PersistenceError as exc:
            logger.error("Snapshot checkpoint failed: %s", exc, exc_info=True)
            return False
        return True
