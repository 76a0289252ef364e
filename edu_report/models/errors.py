from __future__ import annotations

from .shapes import ReportShape

"""Error taxonomy of the report engine.

Every error carries ``user_message``: the text shown to the person who sent
the file. ``error_type`` is the UPPER_SNAKE label written to the error log.
"""

__all__ = [
    "ReportError",
    "ReadError",
    "NoDataError",
    "UnrecognizedShapeError",
    "MissingColumnsError",
    "InvalidModeError",
]

MODE_HINT = "Используйте /start, чтобы выбрать режим обработки вручную."


class ReportError(Exception):
    """Base exception for report processing failures."""
    error_type = "REPORT_ERROR"

    @property
    def user_message(self) -> str:
        return str(self)


class ReadError(ReportError):
    """Raised when a workbook cannot be opened, parsed, or has no sheets."""
    error_type = "READ_ERROR"

    @property
    def user_message(self) -> str:
        return f"Ошибка при обработке файла: {self}"


class NoDataError(ReportError):
    """Sheet has fewer rows than the shape needs. Informational, not a failure."""
    error_type = "NO_DATA"

    def __init__(self, shape: ReportShape | None = None) -> None:
        super().__init__("no data rows in sheet")
        self.shape = shape

    @property
    def user_message(self) -> str:
        return "Нет данных в файле"


class UnrecognizedShapeError(ReportError):
    """Header matched no shape and no mode was forced."""
    error_type = "UNRECOGNIZED_SHAPE"

    def __init__(self) -> None:
        super().__init__("header row matches no known report shape")

    @property
    def user_message(self) -> str:
        return (
            "Не удалось определить тип файла. Пожалуйста, убедитесь, что выбран "
            f"правильный файл. {MODE_HINT}"
        )


class MissingColumnsError(ReportError):
    """Required columns for a shape were not found in the header row."""
    error_type = "MISSING_COLUMNS"

    def __init__(self, shape: ReportShape, missing: list[str]) -> None:
        super().__init__(f"{shape.value}: required columns not found: {missing}")
        self.shape = shape
        self.missing = missing

    @property
    def user_message(self) -> str:
        return (
            f"Не найдены необходимые колонки для отчета «{self.shape.category_label}». "
            f"{MODE_HINT}"
        )


class InvalidModeError(ReportError):
    """Operator mode is not one of the six shapes."""
    error_type = "INVALID_MODE"

    def __init__(self, mode: object) -> None:
        super().__init__(f"invalid processing mode: {mode!r}")
        self.mode = mode

    @property
    def user_message(self) -> str:
        return f"Некорректный режим обработки. {MODE_HINT}"
