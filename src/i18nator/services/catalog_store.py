"""Load and persist per-language translation catalogues as canonical JSON.

Each managed language owns one flat ``{key: value}`` document stored at
``<base_dir>/<code>.json``. Reads are lenient: a missing or malformed document
is treated as an empty catalogue so that a mutation can always rebuild it from
the reference language. Writes are canonical (sorted keys, two-space indent,
trailing newline) and atomic, so version-control diffs stay minimal and a
reader never observes a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping

from pydantic import TypeAdapter, ValidationError

from i18nator.config.schema import LanguageConfig

_LOGGER = logging.getLogger(__name__)

_DEFAULT_FILE_MODE = 0o644

_CATALOG_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


class CatalogEncodingError(OSError):
    """Raised when a catalogue holds text that cannot be written as UTF-8."""


def serialize_catalog(catalog: Mapping[str, str]) -> str:
    """Return the canonical text form of ``catalog``."""

    ordered = {key: catalog[key] for key in sorted(catalog)}
    return json.dumps(ordered, ensure_ascii=False, indent=2) + "\n"


def encode_catalog(catalog: Mapping[str, str]) -> bytes:
    """Return the UTF-8 bytes written to disk for ``catalog``."""

    try:
        return serialize_catalog(catalog).encode("utf-8")
    except UnicodeEncodeError as error:
        # Lone surrogates, e.g. from undecodable command line bytes.
        raise CatalogEncodingError(f"catalogue is not valid UTF-8 text: {error.reason}") from error


def parse_catalog(raw: str | bytes) -> dict[str, str]:
    """Decode a flat string-to-string JSON object.

    Raises ``ValueError`` when the payload is not valid JSON or contains
    anything other than string values.
    """

    if not raw.strip():
        return {}
    try:
        payload = _CATALOG_ADAPTER.validate_json(raw, strict=True)
    except ValidationError as error:
        raise ValueError(f"not a flat string mapping: {error.error_count()} error(s)") from error
    return payload


def _target_mode(path: Path) -> int:
    # Temporary files are created 0600; keep the destination's permissions.
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        return _DEFAULT_FILE_MODE


class CatalogStore:
    """File-backed storage for the catalogues of the managed languages."""

    def __init__(self, base_dir: str | os.PathLike[str]) -> None:
        self.base_dir = Path(base_dir)

    def path_for(self, language: LanguageConfig) -> Path:
        return self.base_dir / language.filename

    def exists(self, language: LanguageConfig) -> bool:
        return self.path_for(language).is_file()

    def load(self, language: LanguageConfig) -> dict[str, str]:
        """Return the language's catalogue, or an empty one when unavailable."""

        path = self.path_for(language)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as error:
            _LOGGER.warning("Unable to read %s, treating as empty: %s", path, error)
            return {}

        try:
            return parse_catalog(raw)
        except ValueError as error:
            _LOGGER.warning("Ignoring malformed catalogue %s: %s", path, error)
            return {}

    def save(self, language: LanguageConfig, catalog: Mapping[str, str]) -> Path:
        """Write the catalogue atomically; ``OSError`` propagates to the caller."""

        path = self.path_for(language)
        content = encode_catalog(catalog)
        path.parent.mkdir(parents=True, exist_ok=True)

        handle = tempfile.NamedTemporaryFile(
            "wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(handle.name, _target_mode(path))
            os.replace(handle.name, path)
        except BaseException:
            Path(handle.name).unlink(missing_ok=True)
            raise

        _LOGGER.debug("Saved %d key(s) to %s", len(catalog), path)
        return path


__all__ = [
    "CatalogEncodingError",
    "CatalogStore",
    "encode_catalog",
    "parse_catalog",
    "serialize_catalog",
]
