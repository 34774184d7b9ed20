"""Utilities for validating language configuration and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Sequence

from .settings import ConfigurationError, ManagerConfiguration, load_configuration


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_languages(config: ManagerConfiguration) -> list[str]:
    errors: list[str] = []

    if config.languages[0] is not config.reference:
        errors.append(
            _format_scope(
                "languages",
                f"reference language '{config.reference.code}' should be listed first",
            )
        )

    provider_codes = [language.translation_code for language in config.languages]
    duplicates = [code for code, count in Counter(provider_codes).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "languages",
                f"duplicate provider codes detected: {sorted(duplicates)}",
            )
        )

    for language in config.languages:
        if language.provider_code is not None and not language.provider_code.strip():
            errors.append(
                _format_scope(
                    f"languages.{language.code}",
                    "provider_code must be a non-empty string when provided",
                )
            )

    return errors


def _validate_translator(config: ManagerConfiguration) -> list[str]:
    errors: list[str] = []
    translator = config.translator

    if not translator.endpoint.startswith(("http://", "https://")):
        errors.append(_format_scope("translator", "endpoint URL must be absolute"))

    if translator.timeout <= 0:
        errors.append(
            _format_scope("translator", f"timeout {translator.timeout} must be positive")
        )

    return errors


def validate_configuration(config: ManagerConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    if config.workers <= 0:
        errors.append(_format_scope("workers", f"worker count {config.workers} must be positive"))

    errors.extend(_validate_languages(config))
    errors.extend(_validate_translator(config))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the managed language configuration."
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Configuration file to validate (defaults to I18NATOR_CONFIG or the bundled file)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_configuration(args.config)
    except ConfigurationError as error:
        print(f"failed to load configuration: {error}")
        return 1

    issues = validate_configuration(config)
    if issues:
        print(f"{len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print("OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
