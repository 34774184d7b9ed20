"""Errors raised by the catalogue views and their JSON rendering."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

_LOGGER = logging.getLogger(__name__)


class CatalogApiError(Exception):
    """An API failure rendered as ``{"error": ..., "message": ...}``."""

    status = 400
    error = "bad_request"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def body(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message, **self.details}


class UnknownLanguageError(CatalogApiError):
    status = 404
    error = "not_found"

    def __init__(self, code: str, available: Sequence[str]) -> None:
        super().__init__(
            f"Language '{code}' is not managed",
            available_languages=list(available),
        )
        self.code = code


def _render(error: CatalogApiError):
    return jsonify(error.body()), error.status


def install_error_handlers(app: Flask) -> None:
    """Answer every failure of ``app`` with a JSON body instead of HTML."""

    @app.errorhandler(CatalogApiError)
    def handle_catalog_error(error: CatalogApiError):
        _LOGGER.info("Catalogue request rejected: %s", error.message)
        return _render(error)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        # Route misses and wrong methods; the status code names the error.
        wrapped = CatalogApiError(error.description or error.name)
        wrapped.status = error.code or 500
        wrapped.error = error.name.lower().replace(" ", "_")
        return _render(wrapped)


__all__ = ["CatalogApiError", "UnknownLanguageError", "install_error_handlers"]
