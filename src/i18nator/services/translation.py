"""Translation providers used to fill non-reference catalogues."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Protocol

import httpx

from i18nator.config.schema import TranslatorConfig

_LOGGER = logging.getLogger(__name__)


class TranslationErrorKind(str, Enum):
    """Categories of translation failures."""

    REQUEST = "request"
    STATUS = "status"
    PARSE = "parse"
    SHAPE = "shape"
    EMPTY = "empty"


class TranslationError(Exception):
    """Raised when a provider cannot produce a translation."""

    def __init__(self, message: str, kind: TranslationErrorKind) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


class TranslationProvider(Protocol):
    """Anything able to translate text between two language codes."""

    def translate(self, text: str, source: str, target: str) -> str:
        ...


def _literal_fragment(node: Any) -> str | None:
    """Resolve a segment to its literal text.

    A segment is either a string, or an array whose head is itself a segment.
    Other values (numbers, nulls, objects, empty arrays) carry no text.
    """

    while isinstance(node, list):
        if not node:
            return None
        node = node[0]
    if isinstance(node, str):
        return node
    return None


def decode_translation_response(payload: Any) -> str:
    """Extract the translated text from a ``translate_a/single`` response.

    The expected shape is ``[[segment, ...], metadata...]`` where each segment
    is ``[translated, original, ...]``. Only the translated fragments are
    concatenated, in order.
    """

    if not isinstance(payload, list) or not payload:
        raise TranslationError(
            "response is not a non-empty array", TranslationErrorKind.SHAPE
        )

    segments = payload[0]
    if not isinstance(segments, list) or not segments:
        raise TranslationError(
            "response does not start with an array of segments",
            TranslationErrorKind.SHAPE,
        )

    fragments = [
        fragment
        for fragment in (_literal_fragment(segment) for segment in segments)
        if fragment is not None
    ]
    text = "".join(fragments).strip()
    if not text:
        raise TranslationError("response contained no translated text", TranslationErrorKind.EMPTY)
    return text


class GoogleTranslateProvider:
    """Provider backed by the public Google Translate web endpoint."""

    def __init__(
        self,
        config: TranslatorConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or TranslatorConfig()
        self._client = client or httpx.Client(timeout=self.config.timeout)
        self._owns_client = client is None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GoogleTranslateProvider:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _params(self, text: str, source: str, target: str) -> dict[str, str]:
        return {
            "client": self.config.client,
            "sl": source,
            "tl": target,
            "dt": self.config.data_type,
            "q": text,
        }

    def translate(self, text: str, source: str, target: str) -> str:
        if not text:
            return ""

        try:
            text.encode("utf-8")
        except UnicodeEncodeError as error:
            # Lone surrogates cannot be put on the wire.
            raise TranslationError(
                f"text cannot be sent as UTF-8: {error.reason}", TranslationErrorKind.REQUEST
            ) from error

        try:
            response = self._client.get(
                self.config.endpoint, params=self._params(text, source, target)
            )
        except httpx.HTTPError as error:
            raise TranslationError(
                f"request failed: {error}", TranslationErrorKind.REQUEST
            ) from error

        if not response.is_success:
            raise TranslationError(
                f"API returned status {response.status_code}", TranslationErrorKind.STATUS
            )

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise TranslationError(
                f"failed to parse response: {error}", TranslationErrorKind.PARSE
            ) from error

        translated = decode_translation_response(payload)
        _LOGGER.debug("Translated %r from %s to %s", text, source, target)
        return translated


__all__ = [
    "GoogleTranslateProvider",
    "TranslationError",
    "TranslationErrorKind",
    "TranslationProvider",
    "decode_translation_response",
]
