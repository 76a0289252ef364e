from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import Any

from tqdm import tqdm

from ..models.processing_result import FileStatus

"""Progress bar over the workbooks of a run (TTY only).

The bar counts files and shows the running outcome as its postfix
(reports / no_data / failed / findings). Outside a TTY there is no bar and
``write`` falls back to print, so piped output holds only report text and
log lines.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    def __init__(self, total_files: int, *, description: str = "Processing files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.outcomes: Counter[FileStatus] = Counter()
        self.findings = 0

        self.enabled = is_tty_enabled()
        self.pbar: Any | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=False,
                ncols=80,
                ascii=True,
            )

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, status: FileStatus, findings: int = 0) -> None:
        self.outcomes[status] += 1
        self.findings += findings
        if self.pbar is None:
            return
        self.pbar.update(1)
        self.pbar.set_postfix(
            reports=self.outcomes[FileStatus.REPORTED],
            no_data=self.outcomes[FileStatus.NO_DATA],
            failed=self.outcomes[FileStatus.FAILED],
            findings=self.findings,
        )
        self.pbar.set_description(self.description)

    def write(self, text: str) -> None:
        """Print above the bar without breaking it."""
        if self.pbar is not None:
            self.pbar.write(text)
        else:
            print(text)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
