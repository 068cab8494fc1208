"""Database models package.

Shared models live here; feature models live in their feature packages.
``load_all_models()`` imports every model module so that ``Base.metadata``
knows all tables before ``create_all`` runs.
"""

from __future__ import annotations

import importlib
import logging

from .post import Post, PostType

logger = logging.getLogger(__name__)

FEATURE_MODEL_MODULES: tuple[str, ...] = (
    "community_service.features.answers.models",
    "community_service.features.comments.models",
)


def load_all_models() -> None:
    """Import every feature model module, registering its tables."""
    for module_name in FEATURE_MODEL_MODULES:
        importlib.import_module(module_name)
        logger.debug("Loaded models from %s", module_name)


__all__ = ["FEATURE_MODEL_MODULES", "Post", "PostType", "load_all_models"]
