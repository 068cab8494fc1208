"""Post repository: parent lookups for thread listings."""

from __future__ import annotations

from community_service.core.database import BaseRepository
from community_service.core.models.post import Post


class PostRepository(BaseRepository[Post]):
    """Post-specific repository.

    Posts are read-only here, so only the inherited lookups are needed;
    there is no keyset and no listing.
    """

    def __init__(self) -> None:
        super().__init__(Post)


_post_repository: PostRepository | None = None


def get_post_repository() -> PostRepository:
    """Get PostRepository instance."""
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository
