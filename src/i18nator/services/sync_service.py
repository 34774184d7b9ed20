"""Keep every managed catalogue in key parity with the reference language.

The engine is the only component that mutates more than one catalogue. Each
operation first checks its precondition against the reference catalogue and
only then touches the per-language documents, in the configured language
order. Translation failures fall back to the reference text and write
failures are isolated to the affected language, so a single bad language
never prevents the others from being brought in line.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Mapping

from i18nator.config.schema import LanguageConfig
from i18nator.config.settings import Settings

from .catalog_store import CatalogStore
from .translation import TranslationError, TranslationProvider

_LOGGER = logging.getLogger(__name__)


class Operation(str, Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"


class OperationStatus(str, Enum):
    """Overall result of a synchronisation request."""

    COMPLETED = "completed"
    ALREADY_EXISTS = "already_exists"
    MISSING = "missing"
    INVALID_KEY = "invalid_key"


class LanguageStatus(str, Enum):
    """Result of applying an operation to a single catalogue."""

    SAVED = "saved"
    FALLBACK = "fallback"
    REMOVED = "removed"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class LanguageResult:
    language: LanguageConfig
    status: LanguageStatus
    value: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not LanguageStatus.FAILED


@dataclass(frozen=True)
class SyncOutcome:
    """Outcome of one add, update or remove request."""

    operation: Operation
    key: str
    status: OperationStatus
    results: tuple[LanguageResult, ...] = ()

    @property
    def completed(self) -> bool:
        return self.status is OperationStatus.COMPLETED

    @property
    def failures(self) -> tuple[LanguageResult, ...]:
        return tuple(result for result in self.results if not result.ok)


class KeyListing:
    """Ordered, re-iterable view over a snapshot of the reference catalogue."""

    def __init__(self, language: LanguageConfig, snapshot: Mapping[str, str]) -> None:
        self.language = language
        self._snapshot = dict(snapshot)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for key in sorted(self._snapshot):
            yield key, self._snapshot[key]

    def __len__(self) -> int:
        return len(self._snapshot)

    def __bool__(self) -> bool:
        return bool(self._snapshot)


@dataclass(frozen=True)
class LanguageAudit:
    """Key drift between one catalogue and the reference catalogue."""

    language: LanguageConfig
    exists: bool
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)

    @property
    def in_parity(self) -> bool:
        return not self.missing and not self.extra


class SynchronizationEngine:
    """Apply catalogue mutations across every managed language."""

    def __init__(
        self,
        settings: Settings,
        provider: TranslationProvider,
        *,
        store: CatalogStore | None = None,
    ) -> None:
        self.settings = settings
        self.provider = provider
        self.store = store or CatalogStore(settings.base_dir)

    @property
    def languages(self) -> tuple[LanguageConfig, ...]:
        return self.settings.languages

    @property
    def reference(self) -> LanguageConfig:
        return self.settings.reference

    def _reject_blank_key(self, operation: Operation, key: str) -> SyncOutcome | None:
        if key.strip():
            return None
        _LOGGER.info("Refusing to %s a blank key", operation.value)
        return SyncOutcome(operation, key, OperationStatus.INVALID_KEY)

    def _reference_has(self, key: str) -> bool:
        return key in self.store.load(self.reference)

    def _fan_out(
        self, worker: Callable[[LanguageConfig], LanguageResult]
    ) -> tuple[LanguageResult, ...]:
        workers = self.settings.configuration.workers
        if workers <= 1 or len(self.languages) <= 1:
            return tuple(worker(language) for language in self.languages)

        # ``map`` yields in submission order, keeping reports deterministic.
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return tuple(executor.map(worker, self.languages))

    def _persist(
        self,
        language: LanguageConfig,
        catalog: Mapping[str, str],
        status: LanguageStatus,
        value: str | None,
        error: str | None = None,
    ) -> LanguageResult:
        try:
            self.store.save(language, catalog)
        except OSError as exc:
            _LOGGER.error("Failed to save %s: %s", self.store.path_for(language), exc)
            return LanguageResult(language, LanguageStatus.FAILED, value, str(exc))
        return LanguageResult(language, status, value, error)

    def _write_value(self, key: str, value: str) -> Callable[[LanguageConfig], LanguageResult]:
        source = self.reference.translation_code

        def apply(language: LanguageConfig) -> LanguageResult:
            catalog = self.store.load(language)
            if language.reference:
                catalog[key] = value
                return self._persist(language, catalog, LanguageStatus.SAVED, value)

            status = LanguageStatus.SAVED
            error: str | None = None
            try:
                translated = self.provider.translate(value, source, language.translation_code)
            except TranslationError as exc:
                _LOGGER.warning(
                    "Translation to %s failed (%s: %s), storing source text",
                    language.code,
                    exc.kind.value,
                    exc.message,
                )
                translated = value
                status = LanguageStatus.FALLBACK
                error = exc.message

            catalog[key] = translated
            return self._persist(language, catalog, status, translated, error)

        return apply

    def add(self, key: str, value: str) -> SyncOutcome:
        """Create ``key`` in every catalogue unless the reference already has it."""

        rejected = self._reject_blank_key(Operation.ADD, key)
        if rejected is not None:
            return rejected

        if self._reference_has(key):
            _LOGGER.info("Key %r already exists, nothing added", key)
            return SyncOutcome(Operation.ADD, key, OperationStatus.ALREADY_EXISTS)

        results = self._fan_out(self._write_value(key, value))
        return SyncOutcome(Operation.ADD, key, OperationStatus.COMPLETED, results)

    def update(self, key: str, value: str) -> SyncOutcome:
        """Replace ``key`` everywhere, re-translating from the new value."""

        rejected = self._reject_blank_key(Operation.UPDATE, key)
        if rejected is not None:
            return rejected

        if not self._reference_has(key):
            _LOGGER.info("Key %r does not exist, nothing updated", key)
            return SyncOutcome(Operation.UPDATE, key, OperationStatus.MISSING)

        results = self._fan_out(self._write_value(key, value))
        return SyncOutcome(Operation.UPDATE, key, OperationStatus.COMPLETED, results)

    def remove(self, key: str) -> SyncOutcome:
        """Delete ``key`` from every catalogue that still holds it."""

        rejected = self._reject_blank_key(Operation.REMOVE, key)
        if rejected is not None:
            return rejected

        if not self._reference_has(key):
            _LOGGER.info("Key %r does not exist, nothing removed", key)
            return SyncOutcome(Operation.REMOVE, key, OperationStatus.MISSING)

        def apply(language: LanguageConfig) -> LanguageResult:
            catalog = self.store.load(language)
            if key not in catalog:
                # Tolerated: a previous partial failure may have left this language behind.
                _LOGGER.info("Key %r not present in %s", key, language.filename)
                return LanguageResult(language, LanguageStatus.NOT_FOUND)

            del catalog[key]
            return self._persist(language, catalog, LanguageStatus.REMOVED, None)

        results = self._fan_out(apply)
        return SyncOutcome(Operation.REMOVE, key, OperationStatus.COMPLETED, results)

    def list_keys(self) -> KeyListing:
        """Return the reference catalogue as an ordered listing."""

        return KeyListing(self.reference, self.store.load(self.reference))

    def load_catalog(self, code: str) -> dict[str, str]:
        """Return one language's catalogue; unknown codes raise ``KeyError``."""

        return self.store.load(self.settings.configuration.get_language(code))

    def audit(self) -> tuple[LanguageAudit, ...]:
        """Compare every non-reference catalogue's key set with the reference."""

        expected = set(self.store.load(self.reference))
        audits: list[LanguageAudit] = []
        for language in self.languages:
            if language.reference:
                continue
            actual = set(self.store.load(language))
            audits.append(
                LanguageAudit(
                    language=language,
                    exists=self.store.exists(language),
                    missing=tuple(sorted(expected - actual)),
                    extra=tuple(sorted(actual - expected)),
                )
            )
        return tuple(audits)


__all__ = [
    "KeyListing",
    "LanguageAudit",
    "LanguageResult",
    "LanguageStatus",
    "Operation",
    "OperationStatus",
    "SyncOutcome",
    "SynchronizationEngine",
]
