"""Blueprint registrations for application routes."""

from flask import Flask

from .catalogs import catalogs_blueprint, keys_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(keys_blueprint)
    app.register_blueprint(catalogs_blueprint)
