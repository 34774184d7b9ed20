"""Catalogue storage, translation and synchronisation services."""

from .catalog_store import CatalogStore
from .sync_service import (
    KeyListing,
    LanguageAudit,
    LanguageResult,
    LanguageStatus,
    Operation,
    OperationStatus,
    SyncOutcome,
    SynchronizationEngine,
)
from .translation import (
    GoogleTranslateProvider,
    TranslationError,
    TranslationErrorKind,
    TranslationProvider,
)

__all__ = [
    "CatalogStore",
    "GoogleTranslateProvider",
    "KeyListing",
    "LanguageAudit",
    "LanguageResult",
    "LanguageStatus",
    "Operation",
    "OperationStatus",
    "SyncOutcome",
    "SynchronizationEngine",
    "TranslationError",
    "TranslationErrorKind",
    "TranslationProvider",
]
