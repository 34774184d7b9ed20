"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from i18nator.app import create_app  # noqa: E402
from i18nator.config import (  # noqa: E402
    ManagerConfiguration,
    Settings,
    load_configuration,
)
from i18nator.services import (  # noqa: E402
    SynchronizationEngine,
    TranslationError,
    TranslationErrorKind,
)


class EchoProvider:
    """Deterministic stand-in translator that tags text with the target code."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def translate(self, text: str, source: str, target: str) -> str:
        self.calls.append((text, source, target))
        return f"[{target}] {text}"


class FailingProvider:
    """Translator whose every call fails, forcing the source-text fallback."""

    def __init__(self) -> None:
        self.calls = 0

    def translate(self, text: str, source: str, target: str) -> str:
        self.calls += 1
        raise TranslationError("service unavailable", TranslationErrorKind.REQUEST)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("I18NATOR_CONFIG", "I18NATOR_BASE_DIR", "I18NATOR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def configuration() -> ManagerConfiguration:
    """Return the bundled language configuration (en reference, km, zh)."""

    return load_configuration()


@pytest.fixture()
def base_dir(tmp_path: Path) -> Path:
    return tmp_path / "i18n"


@pytest.fixture()
def settings(base_dir: Path, configuration: ManagerConfiguration) -> Settings:
    return Settings(base_dir=base_dir, configuration=configuration)


@pytest.fixture()
def echo_provider() -> EchoProvider:
    return EchoProvider()


@pytest.fixture()
def failing_provider() -> FailingProvider:
    return FailingProvider()


@pytest.fixture()
def engine(settings: Settings, echo_provider: EchoProvider) -> SynchronizationEngine:
    return SynchronizationEngine(settings, echo_provider)


@pytest.fixture()
def app(engine: SynchronizationEngine) -> Flask:
    """Return a configured Flask application bound to the temporary catalogues."""

    application = create_app(engine.settings, engine=engine)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
