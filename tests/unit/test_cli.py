"""End-to-end coverage of the ``i18nator`` command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from i18nator import cli


def _run(base_dir: Path, provider, *argv: str) -> int:
    return cli.main(["--base-dir", str(base_dir), *argv], provider=provider)


def _read(base_dir: Path, code: str) -> dict[str, str]:
    return json.loads((base_dir / f"{code}.json").read_text(encoding="utf-8"))


def test_full_key_lifecycle(
    base_dir: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(base_dir, echo_provider, "add", "greeting", "Hello") == 0
    output = capsys.readouterr().out
    assert f"📂 Using base path: {base_dir}" in output
    assert "✅ en.json: Hello" in output
    assert "✅ km.json: [km] Hello" in output
    assert "✅ zh.json: [zh-CN] Hello" in output
    assert "✨ i18n key added to all languages!" in output
    assert _read(base_dir, "en") == {"greeting": "Hello"}

    assert _run(base_dir, echo_provider, "list") == 0
    output = capsys.readouterr().out
    assert "📋 Found 1 i18n keys:" in output
    assert [line for line in output.splitlines() if line.startswith("  ")] == [
        "  greeting: Hello"
    ]

    assert _run(base_dir, echo_provider, "update", "greeting", "Hi") == 0
    assert "✨ i18n key updated in all languages!" in capsys.readouterr().out
    assert _read(base_dir, "km") == {"greeting": "[km] Hi"}

    assert _run(base_dir, echo_provider, "remove", "greeting") == 0
    output = capsys.readouterr().out
    assert "✅ zh.json: Key removed" in output
    for code in ("en", "km", "zh"):
        assert _read(base_dir, code) == {}

    assert _run(base_dir, echo_provider, "list") == 0
    assert "📭 No i18n keys found" in capsys.readouterr().out


def test_precondition_violations_exit_successfully(
    base_dir: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    _run(base_dir, echo_provider, "add", "greeting", "Hello")
    capsys.readouterr()

    assert _run(base_dir, echo_provider, "add", "greeting", "Hello") == 0
    assert "already exists. Use 'update' command" in capsys.readouterr().out

    assert _run(base_dir, echo_provider, "update", "missing", "value") == 0
    assert "Key 'missing' does not exist. Use 'add' command" in capsys.readouterr().out

    assert _run(base_dir, echo_provider, "remove", "missing") == 0
    assert "Key 'missing' does not exist" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [["add", "", "Hello"], ["update", " ", "Hi"], ["remove", ""]],
)
def test_blank_key_is_refused(
    argv: list[str], base_dir: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(base_dir, echo_provider, *argv) == 0

    assert "Keys must be non-empty; nothing was changed." in capsys.readouterr().out
    assert list(base_dir.glob("*.json")) == []
    assert echo_provider.calls == []


def test_unsavable_value_is_reported_without_aborting(
    base_dir: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(base_dir, echo_provider, "add", "greeting", "bad \udcff byte") == 0

    output = capsys.readouterr().out
    assert "❌ en.json: Failed to save (catalogue is not valid UTF-8 text" in output
    assert "3 language(s) could not be saved: en.json, km.json, zh.json" in output
    assert list(base_dir.glob("*.json")) == []


def test_translation_failures_are_reported_per_language(
    base_dir: Path, failing_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(base_dir, failing_provider, "add", "greeting", "hello") == 0

    output = capsys.readouterr().out
    assert "❌ km.json: Translation failed (service unavailable), using en" in output
    assert "✅ km.json: hello" in output
    assert "✨ i18n key added to all languages!" in output
    assert _read(base_dir, "zh") == {"greeting": "hello"}


def test_remove_reports_languages_missing_the_key(
    base_dir: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    _run(base_dir, echo_provider, "add", "greeting", "Hello")
    (base_dir / "km.json").write_text("{}", encoding="utf-8")
    capsys.readouterr()

    assert _run(base_dir, echo_provider, "remove", "greeting") == 0

    assert "⏭️  km.json: Key not found" in capsys.readouterr().out


def test_check_reports_drift(
    base_dir: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    _run(base_dir, echo_provider, "add", "greeting", "Hello")
    capsys.readouterr()

    assert _run(base_dir, echo_provider, "check") == 0
    assert "[km.json] OK" in capsys.readouterr().out

    (base_dir / "zh.json").write_text('{"old": "旧"}', encoding="utf-8")
    assert _run(base_dir, echo_provider, "check") == 1
    output = capsys.readouterr().out
    assert "[missing] zh.json: greeting" in output
    assert "[extra] zh.json: old" in output


def test_unusable_base_directory_is_a_setup_failure(
    tmp_path: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    blocker = tmp_path / "occupied"
    blocker.write_text("not a directory", encoding="utf-8")

    assert _run(blocker / "i18n", echo_provider, "list") == 1
    assert "❌ Error:" in capsys.readouterr().out


def test_invalid_configuration_is_a_setup_failure(
    tmp_path: Path, echo_provider, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = tmp_path / "languages.yaml"
    config_path.write_text("languages:\n  - code: en\n  - code: km\n", encoding="utf-8")

    exit_code = cli.main(
        ["--config", str(config_path), "--base-dir", str(tmp_path / "i18n"), "list"],
        provider=echo_provider,
    )

    assert exit_code == 1
    assert "Exactly one reference language" in capsys.readouterr().out


def test_base_dir_defaults_to_project_layout(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, echo_provider
) -> None:
    monkeypatch.chdir(tmp_path)

    assert cli.main(["add", "greeting", "Hello"], provider=echo_provider) == 0

    expected = tmp_path / "pkg" / "translates" / "localize" / "i18n" / "en.json"
    assert json.loads(expected.read_text(encoding="utf-8")) == {"greeting": "Hello"}


def test_base_dir_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, echo_provider
) -> None:
    monkeypatch.setenv("I18NATOR_BASE_DIR", str(tmp_path / "env-dir"))

    assert cli.main(["add", "greeting", "Hello"], provider=echo_provider) == 0

    assert (tmp_path / "env-dir" / "en.json").is_file()


@pytest.mark.parametrize(
    "argv",
    [["add", "only-key"], ["update", "key"], ["remove"], ["remove", "a", "b"], ["list", "extra"]],
)
def test_argument_count_is_enforced(argv: list[str], tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--base-dir", str(tmp_path), *argv])

    assert excinfo.value.code == 2
