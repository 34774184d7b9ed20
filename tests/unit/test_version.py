"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from i18nator import version
from i18nator.version import get_project_version, version_from_pyproject

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


@pytest.fixture(autouse=True)
def _fresh_cache():
    get_project_version.cache_clear()
    yield
    get_project_version.cache_clear()


def _not_installed(_: str) -> str:
    raise metadata.PackageNotFoundError


def test_get_project_version_prefers_package_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"


def test_get_project_version_falls_back_to_pyproject(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(metadata, "version", _not_installed)

    assert get_project_version() == "0.4.0"
    assert 'version = "0.4.0"' in PYPROJECT.read_text(encoding="utf-8")


def test_missing_pyproject_reports_unknown_version(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(metadata, "version", _not_installed)
    monkeypatch.setattr(version, "PYPROJECT_PATH", tmp_path / "pyproject.toml")

    assert get_project_version() == version.UNKNOWN_VERSION


def test_version_is_read_from_the_project_table_only() -> None:
    text = (
        '[build-system]\nversion = "1.0"\n\n'
        '[project]\nname = "demo"\nversion = "2.3.4"\n\n'
        '[tool.other]\nversion = "5.6"\n'
    )

    assert version_from_pyproject(text) == "2.3.4"
    assert version_from_pyproject('[project]\nname = "demo"\n\n[tool.x]\nversion = "1"\n') is None
