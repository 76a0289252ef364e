from __future__ import annotations
import pytest
from pathlib import Path
from edu_report.config.loader import ConfigError, ReportConfig, load_config


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.max_message_length == 4000
    assert cfg.allowed_extensions == (".xlsx", ".xls")
    assert cfg.source_directory == "./data"
    assert cfg.error_log_directory == "./logs"


def test_load_config_missing_file_uses_defaults(temp_workdir: Path):
    cfg = load_config(temp_workdir / "config" / "not_exists.yml")
    assert cfg == ReportConfig()


def test_load_config_empty_file_uses_defaults(write_config: Path):
    write_config.write_text("", encoding="utf-8")
    assert load_config(write_config) == ReportConfig()


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("max_message_length: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_wrong_type(write_config: Path):
    write_config.write_text("max_message_length: many\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_zero_length_rejected(write_config: Path):
    write_config.write_text("max_message_length: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    # additionalProperties: false
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_bad_extension(write_config: Path):
    write_config.write_text('allowed_extensions: ["xlsx"]\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_extensions_are_lowercased(write_config: Path):
    write_config.write_text('allowed_extensions: [".XLSX"]\n', encoding="utf-8")
    assert load_config(write_config).allowed_extensions == (".xlsx",)


def test_env_overrides_max_length(write_config: Path, monkeypatch):
    monkeypatch.setenv("EDU_REPORT_MAX_MESSAGE_LENGTH", "100")
    assert load_config(write_config).max_message_length == 100


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_env_max_length_invalid(write_config: Path, monkeypatch, raw: str):
    monkeypatch.setenv("EDU_REPORT_MAX_MESSAGE_LENGTH", raw)
    with pytest.raises(ConfigError):
        load_config(write_config)
