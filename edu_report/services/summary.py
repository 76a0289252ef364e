from __future__ import annotations

from ..models.processing_result import BatchResult

"""SUMMARY line rendering for a CLI run."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: BatchResult) -> str:
    """Render the SUMMARY line of a batch run.

    Format:
    SUMMARY files={total} reports={reported} no_data={no_data} failed={failed}
    findings={findings} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 9, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> result = BatchResult(
        ...     reported_files=2, no_data_files=0, failed_files=1, total_findings=7,
        ...     start_time=t, end_time=t, elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=3 reports=2 no_data=0 failed=1 findings=7 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"reports={result.reported_files} "
        f"no_data={result.no_data_files} "
        f"failed={result.failed_files} "
        f"findings={result.total_findings} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
