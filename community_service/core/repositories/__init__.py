"""Repository package for shared models.

Available Repositories:
    - PostRepository: Post lookups used to resolve the parent of a listing
"""

from __future__ import annotations

from community_service.core.repositories.post import PostRepository, get_post_repository

__all__ = [
    "PostRepository",
    "get_post_repository",
]
