"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from core.config import Config
from core.config_file import (
    CONFIG_FILENAME,
    create_default_config,
    find_config_file,
    get_config_value,
    load_config,
    validate_config,
)
from core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop any MEMO_FACTORIAL_* variables from the host environment."""
    for name in (
        "MEMO_FACTORIAL_CONFIG_DIR",
        "MEMO_FACTORIAL_PROFILE",
        "MEMO_FACTORIAL_OUTPUT",
        "MEMO_FACTORIAL_INPUT",
        "MEMO_FACTORIAL_SHOW_CACHE",
    ):
        monkeypatch.delenv(name, raising=False)


def write_config(directory, text):
    path = directory / CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults(tmp_path):
    settings = Config(config_dir=tmp_path)
    assert settings.output_type == "uint64"
    assert settings.input_type == "int32"
    assert settings.show_cache is False
    assert settings.profile is None


def test_config_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("MEMO_FACTORIAL_CONFIG_DIR", str(tmp_path))
    write_config(tmp_path, '[engine]\noutput_type = "uint32"\n')

    settings = Config()

    assert settings.config_dir == tmp_path
    assert settings.output_type == "uint32"


def test_file_values(tmp_path):
    write_config(tmp_path, '[engine]\noutput_type = "int64"\ninput_type = "int16"\n[cli]\nshow_cache = true\n')

    settings = Config(config_dir=tmp_path)

    assert settings.output_type == "int64"
    assert settings.input_type == "int16"
    assert settings.show_cache is True


def test_env_overrides_file(tmp_path, monkeypatch):
    write_config(tmp_path, '[engine]\noutput_type = "int64"\n[cli]\nshow_cache = true\n')
    monkeypatch.setenv("MEMO_FACTORIAL_OUTPUT", "uint128")
    monkeypatch.setenv("MEMO_FACTORIAL_SHOW_CACHE", "no")

    settings = Config(config_dir=tmp_path)

    assert settings.output_type == "uint128"
    assert settings.show_cache is False


def test_profile_overrides_base(tmp_path, monkeypatch):
    write_config(
        tmp_path,
        '[engine]\noutput_type = "uint64"\ninput_type = "int32"\n'
        '[profiles.small.engine]\noutput_type = "uint16"\n',
    )
    monkeypatch.setenv("MEMO_FACTORIAL_PROFILE", "small")

    settings = Config(config_dir=tmp_path)

    assert settings.output_type == "uint16"
    assert settings.input_type == "int32"


def test_missing_profile(tmp_path):
    write_config(tmp_path, '[engine]\noutput_type = "uint64"\n')
    with pytest.raises(ConfigurationError, match="Profile 'big' not found"):
        load_config(str(tmp_path), profile="big")


def test_malformed_toml(tmp_path):
    write_config(tmp_path, "[engine\noutput_type = ")
    with pytest.raises(ConfigurationError, match="Invalid config file"):
        Config(config_dir=tmp_path)


def test_non_integral_type_in_file(tmp_path):
    write_config(tmp_path, '[engine]\noutput_type = "float64"\n')
    with pytest.raises(ConfigurationError, match="engine.output_type"):
        Config(config_dir=tmp_path)


def test_empty_env_type(tmp_path, monkeypatch):
    monkeypatch.setenv("MEMO_FACTORIAL_INPUT", "")
    with pytest.raises(ConfigurationError):
        Config(config_dir=tmp_path)


def test_find_config_file(tmp_path):
    assert find_config_file(str(tmp_path)) is None
    path = write_config(tmp_path, "")
    assert find_config_file(str(tmp_path)) == path


def test_load_config_without_file(tmp_path):
    assert load_config(str(tmp_path)) == {}


def test_get_config_value():
    data = {"engine": {"output_type": "uint8"}}
    assert get_config_value(data, "engine.output_type") == "uint8"
    assert get_config_value(data, "engine.input_type", "int32") == "int32"
    assert get_config_value(data, "cli.show_cache") is None


def test_validate_config_collects_errors():
    is_valid, errors = validate_config(
        {"engine": {"output_type": 64, "input_type": "double"}, "cli": {"show_cache": "yes"}}
    )
    assert not is_valid
    assert len(errors) == 3


def test_create_default_config_round_trips(tmp_path):
    path = create_default_config(str(tmp_path))

    assert path.name == CONFIG_FILENAME
    settings = Config(config_dir=tmp_path)
    assert settings.output_type == "uint64"
    assert settings.input_type == "int32"
    assert load_config(str(tmp_path), profile="small")["engine"]["output_type"] == "uint32"


def test_create_default_config_refuses_to_overwrite(tmp_path):
    write_config(tmp_path, "")
    with pytest.raises(ConfigurationError, match="already exists"):
        create_default_config(str(tmp_path))
