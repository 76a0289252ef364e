# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from edu_report.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("EDU_REPORT_MAX_MESSAGE_LENGTH", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """max_message_length: 4000
allowed_extensions: [".xlsx", ".xls"]
source_directory: ./data
error_log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "report.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_excel():
    """Write ``rows`` as the first sheet of an .xlsx file without header/index."""
    def _make(path: Path, rows: list[list[object]], extra_sheets: dict[str, list[list[object]]] | None = None) -> Path:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name="Лист1", header=False, index=False)
            for name, sheet_rows in (extra_sheets or {}).items():
                pd.DataFrame(sheet_rows).to_excel(writer, sheet_name=name, header=False, index=False)
        return path
    return _make


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()
