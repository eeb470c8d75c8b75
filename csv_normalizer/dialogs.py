"""
Native file dialogs.

The entry point only depends on the FilePicker protocol, so the normalizer
can be driven headlessly with literal paths.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Tuple

from .rules import CSV_FILETYPES, DEFAULT_OUTPUT_NAME


class FilePicker(Protocol):
    def pick_open_file(self) -> Optional[Path]:
        ...

    def pick_save_file(self, input_path: Path) -> Optional[Path]:
        ...


def default_save_location(input_path: Path) -> Tuple[Path, str]:
    """Initial directory and file name offered by the save dialog."""
    parent = input_path.parent
    # a filesystem root is its own parent
    if parent == input_path:
        parent = Path(".")
    return parent, DEFAULT_OUTPUT_NAME


class TkFilePicker:
    """FilePicker backed by tkinter.filedialog with a hidden root window."""

    def pick_open_file(self) -> Optional[Path]:
        from tkinter import Tk, filedialog

        root = Tk()
        root.withdraw()
        try:
            picked = filedialog.askopenfilename(
                title="Select CSV file",
                filetypes=CSV_FILETYPES,
            )
        finally:
            root.destroy()
        return Path(picked) if picked else None

    def pick_save_file(self, input_path: Path) -> Optional[Path]:
        from tkinter import Tk, filedialog

        initialdir, initialfile = default_save_location(input_path)
        root = Tk()
        root.withdraw()
        try:
            picked = filedialog.asksaveasfilename(
                title="Save normalized file as...",
                initialdir=str(initialdir),
                initialfile=initialfile,
                defaultextension=".csv",
                filetypes=CSV_FILETYPES,
            )
        finally:
            root.destroy()
        return Path(picked) if picked else None
