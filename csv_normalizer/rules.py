"""
Deterministic normalization rules.

Column positions are zero-based and fixed; anything not listed is only trimmed.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Rule(str, Enum):
    DIGITS = "digits"
    DATE = "date"
    PASSTHROUGH = "passthrough"


COLUMN_RULES: Dict[int, Rule] = {
    3: Rule.DIGITS,   # phone number
    4: Rule.DATE,
    5: Rule.DIGITS,   # SSN
    6: Rule.DATE,
    7: Rule.DATE,
    8: Rule.DATE,
    9: Rule.DATE,
    17: Rule.DIGITS,  # postal code
    18: Rule.DIGITS,  # monthly rent
    19: Rule.DIGITS,  # outstanding balance
}


def rule_for(index: int) -> Rule:
    return COLUMN_RULES.get(index, Rule.PASSTHROUGH)


# Tried in order; the first one that parses wins.
DATE_INPUT_FORMATS = ("%m/%d/%Y", "%d-%m-%Y")

CSV_DELIMITER = ","
# no practical bound on field length; 2**31 - 1 fits a C long on every platform
CSV_FIELD_SIZE_LIMIT = 2**31 - 1
OUTPUT_LINE_TERMINATOR = "\n"
OUTPUT_ENCODING = "utf-8"

DEFAULT_OUTPUT_NAME = "normalized_output.csv"
CSV_FILETYPES = [("CSV files", "*.csv")]
