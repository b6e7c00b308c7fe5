from __future__ import annotations

import pytest

from jade_mode.config import JadeModeSettings, load_settings
from jade_mode.runtime import telemetry


def test_default_settings() -> None:
    settings = JadeModeSettings()

    assert settings.indent_offset == 4
    assert settings.file_patterns == (r"\.jade\Z",)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("main.jade", True),
        ("/src/project/lib.jade", True),
        ("main.jade.bak", False),
        ("jade.txt", False),
        ("main.JADE", False),
    ],
)
def test_file_association(path: str, expected: bool) -> None:
    assert JadeModeSettings().matches_file(path) is expected


def test_load_settings_reads_indent_offset() -> None:
    settings = load_settings({"JADE_MODE_INDENT_OFFSET": "2"})

    assert settings.indent_offset == 2


def test_load_settings_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JADE_MODE_INDENT_OFFSET", raising=False)

    assert load_settings().indent_offset == 4


@pytest.mark.parametrize("raw", ["abc", "0", "-4"])
def test_load_settings_rejects_bad_offsets(raw: str) -> None:
    with pytest.raises(ValueError):
        load_settings({"JADE_MODE_INDENT_OFFSET": raw})


def test_telemetry_rejects_conflicting_configuration() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_telemetry_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
