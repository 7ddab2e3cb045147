from __future__ import annotations

import pytest

from pbxref.config import GeneratorSettings, build_settings_from_dict, settings_from_env
from pbxref.exceptions import ConfigurationError


def test_settings_defaults() -> None:
    settings = GeneratorSettings()
    assert settings.separator == "-"
    assert settings.algorithm == "md5"
    assert settings.uppercase is True
    assert settings.strict is False


def test_algorithm_is_normalised() -> None:
    assert GeneratorSettings(algorithm=" SHA256 ").algorithm == "sha256"


def test_unknown_algorithm_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_settings_from_dict({"algorithm": "not-a-hash"})


def test_variable_length_algorithm_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_settings_from_dict({"algorithm": "shake_128"})


def test_settings_from_env() -> None:
    settings = settings_from_env(
        {"PBXREF_ALGORITHM": "sha1", "PBXREF_STRICT": "true", "UNRELATED": "x"}
    )
    assert settings.algorithm == "sha1"
    assert settings.strict is True
    assert settings.separator == "-"


def test_settings_from_env_invalid_value() -> None:
    with pytest.raises(ConfigurationError):
        settings_from_env({"PBXREF_UPPERCASE": "maybe"})


def test_settings_from_env_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("PBXREF_SEPARATOR", "/")
    monkeypatch.delenv("PBXREF_ALGORITHM", raising=False)
    settings = settings_from_env()
    assert settings.separator == "/"
    assert settings.algorithm == "md5"
