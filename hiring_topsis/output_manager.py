# -*- coding: utf-8 -*-
"""
Output Management for TOPSIS Analysis Results
=============================================

Writes analysis artefacts into an organised directory structure::

    outputs/
    ├── results/   — rankings (CSV) and analysis snapshots (JSON)
    └── reports/   — full audit report (sectioned CSV)

The report carries every intermediate step (raw, normalized, weighted
values and both ideals) so each score can be re-derived by hand.
"""

import re
import json
import logging
import pandas as pd
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, Hashable, Iterable, List, Optional, Union

from .config import ExportConfig
from .logger import get_module_logger, timed_operation
from .models import (
    Analysis, AnalysisResult, Position, as_attributes, as_candidates,
)


def sanitize_name(name: str) -> str:
    """Lower-case file-name stem with every non-alphanumeric replaced by ``_``."""
    return re.sub(r'[^a-zA-Z0-9]', '_', name).lower()


class OutputManager:
    """
    Manages structured output to ``results/`` and ``reports/``.

    Directories are created on first write.
    """

    def __init__(self, base_output_dir: Union[str, Path] = 'outputs',
                 config: Optional[ExportConfig] = None):
        self.base_dir = Path(base_output_dir)
        self.results_dir = self.base_dir / 'results'
        self.reports_dir = self.base_dir / 'reports'
        self.config = config or ExportConfig()
        self.logger = get_module_logger('output_manager')

    def _setup_directories(self) -> None:
        for d in [self.results_dir, self.reports_dir]:
            d.mkdir(parents=True, exist_ok=True)

    def report_filename(self, position_name: str,
                        generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or datetime.now()
        date_str = generated_at.strftime(self.config.date_format)
        return f"{self.config.file_prefix}_{sanitize_name(position_name)}_{date_str}.csv"

    # -----------------------------------------------------------------
    # Report
    # -----------------------------------------------------------------

    def build_report(self, position: Position, candidates: Iterable[Any],
                     result: AnalysisResult,
                     generated_at: Optional[datetime] = None) -> str:
        """
        Render the sectioned CSV audit report.

        Parameters
        ----------
        position : Position
            Supplies the name and the attribute configuration
        candidates : sequence of Candidate or dict
            The candidates, in the order that produced ``result``
        result : AnalysisResult
        generated_at : datetime, optional
            Timestamp printed in the header (defaults to now)

        Returns
        -------
        str
        """
        candidates = as_candidates(candidates)
        attributes = as_attributes(position.attributes)
        generated_at = generated_at or datetime.now()
        prec = self.config.float_precision
        fmt = f"{{:.{prec}f}}".format

        index_of: Dict[Hashable, int] = {}
        for i, cand in enumerate(candidates):
            index_of.setdefault(cand.id, i)
        names = [a.name for a in attributes]

        def matrix_rows(matrix: List[List[float]]) -> List[List[str]]:
            rows = []
            for r in result.rankings:
                row = index_of.get(r.candidate_id)
                if row is None:
                    continue
                cells = [fmt(matrix[row][j]) if row < len(matrix) else fmt(0.0)
                         for j in range(len(attributes))]
                rows.append([r.candidate_name] + cells)
            return rows

        rankings = pd.DataFrame([
            [r.rank, r.candidate_name,
             f"{r.closeness_score * 100:.{self.config.score_percent_decimals}f}",
             fmt(r.distance_to_best), fmt(r.distance_to_worst)]
            for r in result.rankings
        ], columns=['Rank', 'Candidate', 'Closeness Score (%)',
                    'Distance to Best', 'Distance to Worst'])

        raw_rows = []
        for r in result.rankings:
            row = index_of.get(r.candidate_id)
            if row is None:
                continue
            cand = candidates[row]
            raw_rows.append([r.candidate_name] + [
                _plain(cand.values.get(a.name)) for a in attributes
            ])
        raw = pd.DataFrame(raw_rows, columns=['Candidate'] + names)

        normalized = pd.DataFrame(matrix_rows(result.normalized_matrix),
                                  columns=['Candidate'] + names)
        weighted = pd.DataFrame(
            matrix_rows(result.weighted_matrix),
            columns=['Candidate'] + [f"{a.name} (w={_plain(a.weight)})" for a in attributes]
        )

        ideals = pd.DataFrame(
            [['Ideal Best (A+)'] + [fmt(v) for v in result.ideal_best],
             ['Ideal Worst (A-)'] + [fmt(v) for v in result.ideal_worst]],
        )
        ideals = ideals.reindex(columns=range(len(names) + 1)).fillna('')
        ideals.columns = [''] + names

        config_df = pd.DataFrame([
            [a.name, _plain(a.weight), a.value_type, 'Yes' if a.beneficial else 'No']
            for a in attributes
        ], columns=['Attribute', 'Weight', 'Type', 'Beneficial'])

        header = "\n".join([
            "TOPSIS Analysis Report",
            f"Position: {position.name}",
            f"Date: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Candidates: {len(candidates)}",
            f"Attributes: {len(attributes)}",
        ])
        sections = [
            header,
            _section('RANKINGS', rankings),
            _section('RAW VALUES', raw),
            _section('NORMALIZED VALUES', normalized),
            _section('WEIGHTED NORMALIZED VALUES', weighted),
            _section('IDEAL SOLUTIONS', ideals),
            _section('ATTRIBUTE CONFIGURATION', config_df),
        ]
        return "\n\n".join(sections)

    def save_report(self, position: Position, candidates: Iterable[Any],
                    result: AnalysisResult,
                    generated_at: Optional[datetime] = None) -> str:
        """Write the audit report to ``reports/`` and return its path."""
        self._setup_directories()
        generated_at = generated_at or datetime.now()
        text = self.build_report(position, candidates, result, generated_at)
        path = self.reports_dir / self.report_filename(position.name, generated_at)
        path.write_text(text, encoding='utf-8')
        self.logger.info(f"Saved report: {path}")
        return str(path)

    # -----------------------------------------------------------------
    # Results
    # -----------------------------------------------------------------

    def save_rankings(self, result: AnalysisResult, position_name: str = 'analysis') -> str:
        """Save the ranking table to CSV."""
        self._setup_directories()
        df = result.to_frame()
        path = self.results_dir / f"rankings_{sanitize_name(position_name)}.csv"
        df.to_csv(path, index=False, float_format=f'%.{self.config.float_precision}f')
        self.logger.info(f"Saved rankings: {path}")
        return str(path)

    def save_snapshot(self, analysis: Analysis, position_name: str = 'analysis') -> str:
        """Save an analysis snapshot as JSON."""
        self._setup_directories()
        path = self.results_dir / f"analysis_{sanitize_name(position_name)}_{analysis.created_at}.json"
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(analysis.to_dict(), f, indent=2, default=str)
        self.logger.info(f"Saved snapshot: {path}")
        return str(path)

    def save_all(self, position: Position, candidates: Iterable[Any],
                 analysis: Analysis,
                 generated_at: Optional[datetime] = None) -> Dict[str, str]:
        """Write report, rankings and snapshot; return their paths by kind."""
        candidates = as_candidates(candidates)
        result = analysis.to_result()
        with timed_operation(self.logger, f"export of '{position.name}'", logging.DEBUG):
            return {
                'report': self.save_report(position, candidates, result, generated_at),
                'rankings': self.save_rankings(result, position.name),
                'snapshot': self.save_snapshot(analysis, position.name),
            }


def _section(title: str, df: pd.DataFrame) -> str:
    body = df.to_csv(index=False, lineterminator='\n').rstrip('\n')
    return f"=== {title} ===\n{body}"


def _plain(value: Any) -> str:
    """Raw value as written in the report; missing values read as 0."""
    if value is None:
        return '0'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def create_output_manager(output_dir: Union[str, Path] = 'outputs',
                          config: Optional[ExportConfig] = None) -> OutputManager:
    """Factory for ``OutputManager``."""
    return OutputManager(output_dir, config)
