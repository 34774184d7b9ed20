"""Application factory for the read-only catalogue HTTP API."""

from __future__ import annotations

from flask import Flask, jsonify

from i18nator.config import Settings, resolve_settings
from i18nator.services import SynchronizationEngine, TranslationError, TranslationErrorKind
from i18nator.version import get_project_version

from .errors import install_error_handlers
from .routes import register_routes
from .routes.catalogs import ENGINE_EXTENSION


class _ReadOnlyProvider:
    """Provider for an engine that only serves reads; it never opens a connection."""

    def translate(self, text: str, source: str, target: str) -> str:
        raise TranslationError(
            "translation is disabled in the read-only API", TranslationErrorKind.REQUEST
        )


def create_app(
    settings: Settings | None = None,
    *,
    engine: SynchronizationEngine | None = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    if engine is None:
        engine = SynchronizationEngine(settings or resolve_settings(), _ReadOnlyProvider())

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions[ENGINE_EXTENSION] = engine

    register_routes(app)
    install_error_handlers(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {
            "status": "ok",
            "version": get_project_version(),
            "reference": engine.reference.code,
            "languages": [language.code for language in engine.languages],
        }
        return jsonify(payload)

    return app
