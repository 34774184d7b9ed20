"""Version string reported by ``i18nator --version`` and ``/health``."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path

DISTRIBUTION = "i18nator"
UNKNOWN_VERSION = "0+unknown"

# Source checkouts keep pyproject.toml two levels above the package directory.
PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"

_PROJECT_VERSION = re.compile(
    r'^\[project\]\s*$(?:(?!^\[).)*?^version\s*=\s*["\']([^"\']+)["\']',
    re.MULTILINE | re.DOTALL,
)

_LOGGER = logging.getLogger(__name__)


def version_from_pyproject(text: str) -> str | None:
    """Return ``[project].version`` from pyproject ``text``, if declared there."""

    match = _PROJECT_VERSION.search(text)
    return match.group(1) if match else None


@lru_cache(maxsize=1)
def get_project_version() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        pass

    try:
        declared = version_from_pyproject(PYPROJECT_PATH.read_text(encoding="utf-8"))
    except OSError as error:
        _LOGGER.warning(
            "%s is not installed and %s is unreadable: %s", DISTRIBUTION, PYPROJECT_PATH, error
        )
        return UNKNOWN_VERSION

    if declared is None:
        _LOGGER.warning("No [project] version declared in %s", PYPROJECT_PATH)
        return UNKNOWN_VERSION
    return declared


__all__ = ["get_project_version", "version_from_pyproject"]
