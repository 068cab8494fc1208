"""Core database package: declarative base, mixins, filters and repository.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming
    - StringPKMixin: Text UUID primary key
    - TimestampMixin: created_at, updated_at tracking (UTC)
    - TimestampedBase: StringPK + timestamps

Repository:
    - BaseRepository[T]: Lookups and keyset-paginated listing with explicit session passing

Query Filters:
    - LimitOffset: Offset pagination helper
    - CollectionFilter: WHERE ... IN clauses

Custom Types:
    - UTCDateTime: Timezone-aware timestamps that always load as UTC
"""

from community_service.core.database.base import (
    Base,
    StringPKMixin,
    TimestampedBase,
    TimestampMixin,
    generate_id,
)
from community_service.core.database.exceptions import NotFoundError, RepositoryError
from community_service.core.database.filters import (
    CollectionFilter,
    LimitOffset,
    StatementFilter,
)
from community_service.core.database.repository import BaseRepository
from community_service.core.database.types import UTCDateTime

__all__ = [
    "Base",
    "BaseRepository",
    "CollectionFilter",
    "LimitOffset",
    "NotFoundError",
    "RepositoryError",
    "StatementFilter",
    "StringPKMixin",
    "TimestampMixin",
    "TimestampedBase",
    "UTCDateTime",
    "generate_id",
]
