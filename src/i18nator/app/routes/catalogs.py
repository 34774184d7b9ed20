"""Read-only views over the managed catalogues."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from i18nator.services import SynchronizationEngine

from ..errors import UnknownLanguageError

ENGINE_EXTENSION = "i18nator.engine"

keys_blueprint = Blueprint("keys", __name__, url_prefix="/api/v1/keys")
catalogs_blueprint = Blueprint("catalogs", __name__, url_prefix="/api/v1/catalogs")


def _engine() -> SynchronizationEngine:
    return current_app.extensions[ENGINE_EXTENSION]


@keys_blueprint.get("/")
def list_reference_keys():
    """Return the reference catalogue ordered by key."""

    listing = _engine().list_keys()
    payload = {
        "language": listing.language.code,
        "count": len(listing),
        "entries": [{"key": key, "value": value} for key, value in listing],
    }
    return jsonify(payload), 200


@catalogs_blueprint.get("/")
def get_parity_report():
    """Summarise how each catalogue's key set compares with the reference."""

    engine = _engine()
    audits = engine.audit()
    payload = {
        "reference": engine.reference.code,
        "in_parity": all(audit.in_parity for audit in audits),
        "languages": [
            {
                "code": audit.language.code,
                "exists": audit.exists,
                "missing": list(audit.missing),
                "extra": list(audit.extra),
            }
            for audit in audits
        ],
    }
    return jsonify(payload), 200


@catalogs_blueprint.get("/<code>")
def get_catalog(code: str):
    """Return a single language's catalogue."""

    engine = _engine()
    try:
        catalog = engine.load_catalog(code)
    except KeyError:
        raise UnknownLanguageError(code, [language.code for language in engine.languages]) from None

    language = engine.settings.configuration.get_language(code)
    payload = {
        "language": language.code,
        "provider_code": language.translation_code,
        "reference": language.reference,
        "entries": dict(sorted(catalog.items())),
    }
    return jsonify(payload), 200
