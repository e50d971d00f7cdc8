# -*- coding: utf-8 -*-
"""Bulk candidate import from delimited text, files and DataFrames."""

import re
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field

from .config import Config, get_config
from .logger import get_module_logger, log_execution
from .models import Candidate, Position


# Leading numeric prefix, e.g. "7", "-3.5", ".5e2", "8 years"
_NUMBER_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_number(text: str) -> Optional[float]:
    """
    Parse the leading number of a cell, ignoring trailing text.

    Returns ``None`` when the cell does not start with a number.
    """
    text = text.strip()
    if text.lstrip('+-').startswith('Infinity'):
        return float('-inf') if text.startswith('-') else float('inf')
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return None
    return float(match.group(0))


@dataclass
class ImportResult:
    """Candidates parsed from a bulk import, plus the rows that were skipped."""
    candidates: List[Candidate] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    has_header: bool = False

    @property
    def ok(self) -> bool:
        return bool(self.candidates) and not self.errors

    def preview(self, n: int = 10) -> pd.DataFrame:
        """First ``n`` parsed candidates as a table."""
        rows = [{'Name': c.name, **c.values} for c in self.candidates[:n]]
        return pd.DataFrame(rows)

    def summary(self) -> str:
        lines = [f"Candidates to import: {len(self.candidates)}"]
        if self.errors:
            lines.append(f"Rows with errors (skipped): {len(self.errors)}")
            for err in self.errors[:5]:
                lines.append(f"  - {err}")
            if len(self.errors) > 5:
                lines.append(f"  ... and {len(self.errors) - 5} more errors")
        return "\n".join(lines)


class CandidateImporter:
    """
    Parses candidate rows for a position.

    Expected columns: ``Name, <attribute 1>, <attribute 2>, ...`` in the
    position's attribute order, separated by commas or tabs. A header row
    is detected automatically.
    """

    def __init__(self, position: Position, config: Optional[Config] = None):
        self.position = position
        self.config = config or get_config()
        self.logger = get_module_logger('data_loader')
        delimiters = re.escape(self.config.importing.delimiters)
        self._split = re.compile(f'[{delimiters}]')

    @property
    def expected_columns(self) -> int:
        return 1 + len(self.position.attributes)

    def parse_text(self, text: str) -> ImportResult:
        """
        Parse pasted CSV / TSV text.

        Row numbers in error messages are 1-based line numbers of ``text``.
        The first failing value of a row rejects the whole row.
        """
        if not text.strip():
            return ImportResult(errors=['No data provided'])
        lines = re.split(r'\r?\n', text.strip())

        result = ImportResult(has_header=self._is_header(lines[0]))

        for i in range(1 if result.has_header else 0, len(lines)):
            line = lines[i].strip()
            if not line:
                continue
            row_no = i + 1
            cells = [c.strip() for c in self._split.split(line)]

            if len(cells) < self.expected_columns:
                result.errors.append(
                    f"Row {row_no}: Expected {self.expected_columns} columns, got {len(cells)}"
                )
                continue

            name = cells[0]
            if not name:
                result.errors.append(f"Row {row_no}: Candidate name is empty")
                continue

            values, error = self._parse_values(cells[1:])
            if error:
                result.errors.append(f"Row {row_no}: {error}")
                continue

            result.candidates.append(Candidate(id=None, name=name, values=values))

        self.logger.info(
            f"Parsed {len(result.candidates)} candidates for '{self.position.name}' "
            f"({len(result.errors)} rows skipped)"
        )
        return result

    def _is_header(self, line: str) -> bool:
        """
        A first line is a header when it names the name column or has a
        non-numeric value cell. The name cell alone is never numeric, so it
        cannot decide.
        """
        cells = [cell.strip() for cell in self._split.split(line)]
        if cells[0].lower() == self.config.importing.name_header.lower():
            return True
        return any(cell != '' and parse_number(cell) is None for cell in cells[1:])

    def _parse_values(self, cells: List[str]):
        values: Dict[str, float] = {}
        for attr, cell in zip(self.position.attributes, cells):
            value = parse_number(cell)
            if value is None:
                return None, f'"{attr.name}" must be a number (got "{cell}")'
            if attr.min_value is not None and value < attr.min_value:
                return None, f'"{attr.name}" must be at least {_fmt(attr.min_value)}'
            if attr.max_value is not None and value > attr.max_value:
                return None, f'"{attr.name}" must be at most {_fmt(attr.max_value)}'
            values[attr.name] = value
        return values, None

    def load(self, filepath: Union[str, Path]) -> ImportResult:
        """Parse a CSV / TSV file."""
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Candidate file not found: {filepath}")
        self.logger.info(f"Loading candidates from {filepath}")
        return self.parse_text(filepath.read_text(encoding='utf-8'))

    def from_dataframe(self, df: pd.DataFrame) -> ImportResult:
        """
        Import from a DataFrame whose first column holds candidate names.

        Remaining columns are matched to attributes by position, like text
        rows; column labels are not interpreted.
        """
        result = ImportResult(has_header=True)
        if df.shape[1] < self.expected_columns:
            result.errors.append(
                f"Expected {self.expected_columns} columns, got {df.shape[1]}"
            )
            return result

        for i, row in enumerate(df.itertuples(index=False), start=2):
            cells = ['' if _is_missing(v) else str(v).strip() for v in row]
            name = cells[0]
            if not name:
                result.errors.append(f"Row {i}: Candidate name is empty")
                continue
            values, error = self._parse_values(cells[1:self.expected_columns])
            if error:
                result.errors.append(f"Row {i}: {error}")
                continue
            result.candidates.append(Candidate(id=None, name=name, values=values))
        return result

    def template(self) -> str:
        """Tab-separated header plus one sample row."""
        headers = [self.config.importing.name_header] + self.position.attribute_names
        sample = ['John Doe']
        for attr in self.position.attributes:
            if attr.min_value is not None and attr.max_value is not None:
                sample.append(_fmt(np.floor((attr.min_value + attr.max_value) / 2 + 0.5)))
            else:
                sample.append('0')
        return '\t'.join(headers) + '\n' + '\t'.join(sample)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and np.isnan(value))


def _fmt(value: float) -> str:
    """Render whole floats without a trailing ``.0``."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


@log_execution()
def load_candidates(filepath: Union[str, Path], position: Position,
                    config: Optional[Config] = None) -> ImportResult:
    """Convenience function to parse a candidate file for a position."""
    return CandidateImporter(position, config).load(filepath)
