"""Command line interface for managing i18n JSON catalogues.

Commands:
  add <key> <value>      Add a key to every language, translating the value
  update <key> <value>   Replace an existing key everywhere, re-translating
  remove <key>           Remove a key from every language
  list                   Show the keys of the reference catalogue
  check                  Report catalogues whose key set drifted from the reference
  serve                  Run the read-only HTTP API

Domain outcomes (blank, existing or missing keys, translation fallbacks,
per-language write failures) are reported and exit with status 0. Setup
problems, such as an invalid configuration or an unusable base directory, exit
with 1. ``check`` is the one exception: like a linter it also exits with 1 when
any catalogue has drifted from the reference.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from i18nator.config import (
    ConfigurationError,
    Settings,
    SetupError,
    ensure_base_directory,
    load_configuration,
    resolve_settings,
)
from i18nator.services import (
    GoogleTranslateProvider,
    LanguageStatus,
    OperationStatus,
    SyncOutcome,
    SynchronizationEngine,
    TranslationProvider,
)
from i18nator.version import get_project_version

LOG_LEVEL_ENV_VAR = "I18NATOR_LOG_LEVEL"

_LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV_VAR, "WARNING")
    level = logging.getLevelName(level_name.strip().upper())
    invalid = not isinstance(level, int)
    logging.basicConfig(
        level=logging.WARNING if invalid else level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if invalid:
        _LOGGER.warning("Ignoring invalid value for %s: %s", LOG_LEVEL_ENV_VAR, level_name)


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18nator",
        description="Manage i18n JSON files with automatic translation support.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_project_version()}")
    parser.add_argument("--config", help="Language configuration file (YAML)")
    parser.add_argument("--base-dir", help="Directory holding the <code>.json catalogues")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", metavar="command", required=True)

    add = commands.add_parser("add", help="Add a new i18n key with automatic translation")
    add.add_argument("key")
    add.add_argument("value")

    commands.add_parser("list", help="List all i18n keys of the reference language")

    update = commands.add_parser("update", help="Update an existing i18n key")
    update.add_argument("key")
    update.add_argument("value")

    remove = commands.add_parser("remove", help="Remove an i18n key from all languages")
    remove.add_argument("key")

    commands.add_parser("check", help="Report keys missing from or extra in each language")

    serve = commands.add_parser("serve", help="Run the read-only HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)

    return parser


def _print_write_outcome(outcome: SyncOutcome, settings: Settings) -> None:
    fallback_source = settings.reference.code
    print()
    for result in outcome.results:
        filename = result.language.filename
        if result.status is LanguageStatus.FAILED:
            print(f"❌ {filename}: Failed to save ({result.error})")
            continue
        if result.status is LanguageStatus.FALLBACK:
            print(f"❌ {filename}: Translation failed ({result.error}), using {fallback_source}")
        print(f"✅ {filename}: {result.value}")


def _print_remove_outcome(outcome: SyncOutcome) -> None:
    print()
    for result in outcome.results:
        filename = result.language.filename
        if result.status is LanguageStatus.REMOVED:
            print(f"✅ {filename}: Key removed")
        elif result.status is LanguageStatus.NOT_FOUND:
            print(f"⏭️  {filename}: Key not found")
        else:
            print(f"❌ {filename}: Failed to save ({result.error})")


def _print_summary(outcome: SyncOutcome, done_message: str) -> None:
    failures = outcome.failures
    if failures:
        names = ", ".join(result.language.filename for result in failures)
        print(f"\n⚠️  {len(failures)} language(s) could not be saved: {names}. Re-run to retry.")
    else:
        print(f"\n✨ {done_message}")


def _report_invalid_key() -> int:
    print("⚠️  Keys must be non-empty; nothing was changed.")
    return 0


def _run_add(engine: SynchronizationEngine, args: argparse.Namespace) -> int:
    outcome = engine.add(args.key, args.value)
    if outcome.status is OperationStatus.INVALID_KEY:
        return _report_invalid_key()
    if outcome.status is OperationStatus.ALREADY_EXISTS:
        print(f"⚠️  Key '{args.key}' already exists. Use 'update' command to modify it.")
        return 0

    _print_write_outcome(outcome, engine.settings)
    _print_summary(outcome, "i18n key added to all languages!")
    return 0


def _run_update(engine: SynchronizationEngine, args: argparse.Namespace) -> int:
    outcome = engine.update(args.key, args.value)
    if outcome.status is OperationStatus.INVALID_KEY:
        return _report_invalid_key()
    if outcome.status is OperationStatus.MISSING:
        print(f"⚠️  Key '{args.key}' does not exist. Use 'add' command to create it.")
        return 0

    _print_write_outcome(outcome, engine.settings)
    _print_summary(outcome, "i18n key updated in all languages!")
    return 0


def _run_remove(engine: SynchronizationEngine, args: argparse.Namespace) -> int:
    outcome = engine.remove(args.key)
    if outcome.status is OperationStatus.INVALID_KEY:
        return _report_invalid_key()
    if outcome.status is OperationStatus.MISSING:
        print(f"⚠️  Key '{args.key}' does not exist")
        return 0

    _print_remove_outcome(outcome)
    _print_summary(outcome, "i18n key removed from all languages!")
    return 0


def _run_list(engine: SynchronizationEngine, args: argparse.Namespace) -> int:
    listing = engine.list_keys()
    if not listing:
        print("📭 No i18n keys found")
        return 0

    print(f"📋 Found {len(listing)} i18n keys:\n")
    for key, value in listing:
        print(f"  {key}: {value}")
    return 0


def _run_check(engine: SynchronizationEngine, args: argparse.Namespace) -> int:
    exit_code = 0
    for audit in engine.audit():
        filename = audit.language.filename
        if audit.in_parity:
            print(f"[{filename}] OK")
            continue

        exit_code = 1
        if not audit.exists:
            print(f"[{filename}] catalogue file is missing")
        if audit.missing:
            print(f"[missing] {filename}: {', '.join(audit.missing)}")
        if audit.extra:
            print(f"[extra] {filename}: {', '.join(audit.extra)}")
    return exit_code


def _run_serve(engine: SynchronizationEngine, args: argparse.Namespace) -> int:
    from i18nator.app import create_app

    app = create_app(engine.settings, engine=engine)
    app.run(host=args.host, port=args.port)
    return 0


_HANDLERS = {
    "add": _run_add,
    "update": _run_update,
    "remove": _run_remove,
    "list": _run_list,
    "check": _run_check,
    "serve": _run_serve,
}


def main(
    argv: Sequence[str] | None = None,
    *,
    provider: TranslationProvider | None = None,
) -> int:
    """Entry point for the ``i18nator`` command."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = resolve_settings(load_configuration(args.config), args.base_dir)
        base_dir = ensure_base_directory(settings)
    except (ConfigurationError, SetupError) as error:
        print(f"❌ Error: {error}")
        return 1

    print(f"📂 Using base path: {base_dir}")

    if provider is not None:
        return _HANDLERS[args.command](SynchronizationEngine(settings, provider), args)

    with GoogleTranslateProvider(settings.configuration.translator) as default_provider:
        return _HANDLERS[args.command](SynchronizationEngine(settings, default_provider), args)


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
