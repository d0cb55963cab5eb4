from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display over a batch of export files (tqdm, TTY only).

In non-TTY environments (CI, redirected output) no bar is created so log
lines stay clean. Success/failure counters are kept either way.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check whether a progress bar should be drawn.

    Returns:
        True if stdout is a TTY
    """
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress bar with ok/failed/rows counters in the postfix."""

    def __init__(self, total_files: int, *, description: str = "Parsing files") -> None:
        """Initialize the tracker.

        Args:
            total_files: Number of export files in the batch
            description: Base label of the progress bar
        """
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.succeeded = 0
        self.failed = 0
        self.rows = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        """Show the file being parsed as ``description [i/n] (name)``.

        Args:
            file_path: Export file about to be parsed
        """
        self.current_file += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(
                f"{self.description} [{self.current_file}/{self.total_files}] ({file_path.name})"
            )

    def finish_file(self, success: bool = True, rows: int = 0) -> None:
        """Count the finished file and refresh the postfix.

        Args:
            success: Whether the file parsed into a dataset
            rows: Rows in the dataset (ignored for failed files)
        """
        if success:
            self.succeeded += 1
            self.rows += rows
        else:
            self.failed += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)
            self.pbar.set_postfix(ok=self.succeeded, failed=self.failed, rows=self.rows)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
