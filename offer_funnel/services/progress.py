from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

One bar over the configured salesperson sheets. In non-TTY environments (CI,
redirected output) no bar is created so log output stays clean.
"""

__all__ = [
    "SheetProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class SheetProgressTracker:
    """Progress tracker over configured sheets."""

    def __init__(self, total_sheets: int, *, description: str = "Reconciling sheets") -> None:
        self.total_sheets = total_sheets
        self.description = description
        self.current_sheet = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_sheets,
                desc=description,
                unit="sheet",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_sheet(self, sheet_name: str) -> None:
        self.current_sheet += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({sheet_name})")

    def finish_sheet(self, offers: int = 0) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(offers=offers)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> SheetProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
