from __future__ import annotations

import logging
import sys
from typing import Optional

from .dialogs import FilePicker, TkFilePicker
from .normalize import process_csv

logger = logging.getLogger(__name__)


def main(picker: Optional[FilePicker] = None) -> int:
    """Ask for an input and an output file, then normalize one into the other."""
    picker = picker or TkFilePicker()

    input_path = picker.pick_open_file()
    if input_path is None:
        print("No file selected. Exiting.", file=sys.stderr)
        return 0

    output_path = picker.pick_save_file(input_path)
    if output_path is None:
        print("No output file selected. Exiting.", file=sys.stderr)
        return 0

    summary = process_csv(input_path, output_path)
    logger.info(
        "%d rows normalized, %d dates left as-is",
        summary.rows,
        summary.dates_unparsed,
    )

    print(f"Normalization complete. Output saved to {output_path}")
    return 0


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(main())


if __name__ == "__main__":
    run()
