from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class NormalizeSummary(BaseModel):
    input_path: Path
    output_path: Path
    encoding: Optional[str] = Field(default=None, examples=["utf-8-sig"])
    header_written: bool = False
    rows: int = 0
    dates_unparsed: int = 0
