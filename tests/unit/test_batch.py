from __future__ import annotations

import json
from pathlib import Path

import pytest

from edu_report.config.loader import ReportConfig
from edu_report.logging.error_log import ErrorLogBuffer
from edu_report.models.processing_result import FileStatus
from edu_report.services.batch import (
    UNSUPPORTED_FILE_MESSAGE,
    BatchError,
    collect_files,
    process_all,
    process_file,
)
from edu_report.services.session import SessionModeStore


@pytest.fixture()
def workbooks(temp_workdir: Path, make_excel) -> Path:
    data = temp_workdir / "data"
    make_excel(data / "attendance.xlsx", [
        ["ФИО преподавателя", "Средняя посещаемость"],
        ["Смирнова", "39.9%"],
        ["Кузнецов", "40.0%"],
    ])
    make_excel(data / "empty.xlsx", [["Группа", "Время", "Пара"]])
    make_excel(data / "unknown.xlsx", [["Name", "Score"], ["a", "1"]])
    (data / "notes.txt").write_text("not a workbook", encoding="utf-8")
    return data


def test_collect_files_scans_directory(workbooks: Path):
    accepted, rejected = collect_files([workbooks], [".xlsx", ".xls"])
    assert [p.name for p in accepted] == ["attendance.xlsx", "empty.xlsx", "unknown.xlsx"]
    assert rejected == []


def test_collect_files_rejects_explicit_other_suffix(workbooks: Path):
    accepted, rejected = collect_files([workbooks / "notes.txt", workbooks / "empty.xlsx"], [".xlsx"])
    assert [p.name for p in accepted] == ["empty.xlsx"]
    assert [p.name for p in rejected] == ["notes.txt"]


def test_collect_files_missing_path(temp_workdir: Path):
    with pytest.raises(BatchError):
        collect_files([temp_workdir / "nope"], [".xlsx"])


def test_process_file_outcomes(workbooks: Path):
    store = SessionModeStore()
    ok = process_file(workbooks / "attendance.xlsx", store=store, conversation_id="c", max_length=4000)
    assert ok.status is FileStatus.REPORTED
    assert ok.shape == "attendance"
    assert ok.findings == 1
    assert "Смирнова (39.9%)" in ok.chunks[0]

    empty = process_file(workbooks / "empty.xlsx", store=store, conversation_id="c", max_length=4000)
    assert empty.status is FileStatus.NO_DATA
    assert empty.shape == "schedule"
    assert empty.chunks == ["Нет данных в файле"]

    unknown = process_file(workbooks / "unknown.xlsx", store=store, conversation_id="c", max_length=4000)
    assert unknown.status is FileStatus.FAILED
    assert unknown.shape is None
    assert "Не удалось определить тип файла" in unknown.error


def test_process_file_uses_stored_mode(workbooks: Path):
    store = SessionModeStore()
    store.set("c", "attendance")
    report = process_file(workbooks / "unknown.xlsx", store=store, conversation_id="c", max_length=4000)
    assert report.status is FileStatus.FAILED
    assert report.shape == "attendance"
    assert "Не найдены необходимые колонки" in report.error
    # another conversation still auto-detects
    other = process_file(workbooks / "attendance.xlsx", store=store, conversation_id="d", max_length=4000)
    assert other.status is FileStatus.REPORTED


def test_process_file_chunks_long_reports(temp_workdir: Path, make_excel):
    rows = [["ФИО преподавателя", "Средняя посещаемость"]]
    rows += [[f"Преподаватель {i}", "10%"] for i in range(200)]
    path = make_excel(temp_workdir / "data" / "long.xlsx", rows)
    report = process_file(path, store=SessionModeStore(), conversation_id="c", max_length=500)
    assert len(report.chunks) > 1
    assert all(len(c) <= 500 for c in report.chunks)
    assert report.findings == 200


def test_process_all_aggregates_and_logs_errors(workbooks: Path, temp_workdir: Path):
    error_log = ErrorLogBuffer(temp_workdir / "logs")
    accepted, _ = collect_files([workbooks], [".xlsx"])
    seen: list[str] = []
    result = process_all(
        accepted,
        ReportConfig(),
        store=SessionModeStore(),
        conversation_id="c",
        rejected=[workbooks / "notes.txt"],
        error_log=error_log,
        emit=lambda report, progress: seen.append(report.file_name),
    )
    assert seen == ["notes.txt", "attendance.xlsx", "empty.xlsx", "unknown.xlsx"]
    assert result.reported_files == 1
    assert result.no_data_files == 1
    assert result.failed_files == 2
    assert result.total_findings == 1
    assert result.file_reports[0].chunks == [UNSUPPORTED_FILE_MESSAGE]

    path = error_log.flush()
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["error_type"]) for r in records] == [
        ("notes.txt", "UNSUPPORTED_FILE"),
        ("unknown.xlsx", "UNRECOGNIZED_SHAPE"),
    ]
