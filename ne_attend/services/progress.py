from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Upload progress display with tqdm (TTY only).

One bar per run, one tick per upload file. In non-TTY environments (CI,
piped output) the bar is disabled so log lines are not interleaved with
ANSI control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress bar.

    Usage::

        with ProgressTracker(len(paths)) as progress:
            for path in paths:
                progress.start_file(path)
                ...
                progress.finish_file()
    """

    def __init__(self, total_files: int, *, description: str = "Uploading files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, **stats: Any) -> None:
        """Advance one file; ``stats`` (e.g. records=, errors=) go to the postfix."""
        if self.pbar is not None:
            if stats:
                self.pbar.set_postfix(**stats)
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
