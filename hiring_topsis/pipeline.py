# -*- coding: utf-8 -*-
"""Analysis pipeline: validate, rank, snapshot and export a position."""

import time
from typing import Any, Dict, Iterable, List, Optional
from dataclasses import dataclass, field

from .config import Config, get_default_config
from .logger import (
    setup_logger, get_logger, ProgressLogger, PipelineLogger, log_context, log_exceptions,
)
from .models import Analysis, AnalysisResult, Candidate, Position, as_candidates
from .mcdm import TOPSISCalculator
from .validation import ValidationResult, validate, validate_attributes
from .weighting import WeightResult, calculate_weights
from .output_manager import OutputManager
from .analysis import CandidateBreakdown, score_breakdown


@dataclass
class PipelineResult:
    """Container for everything one analysis run produced."""
    position: Position
    candidates: List[Candidate]
    result: AnalysisResult
    analysis: Analysis
    validation: ValidationResult
    weights: WeightResult
    breakdown: List[CandidateBreakdown] = field(default_factory=list)
    saved_files: Dict[str, str] = field(default_factory=dict)
    execution_time: float = 0.0

    @property
    def rankings(self):
        return self.result.rankings

    def get_ranking_df(self):
        """Final ranking as DataFrame."""
        return self.result.to_frame()


class RankingPipeline:
    """
    Runs a TOPSIS analysis for one position.

    Validation problems never stop a run: they are logged as warnings and
    returned with the result, and the engine applies its defaults.
    """

    def __init__(self, config: Optional[Config] = None, configure_logging: bool = False):
        """
        Parameters
        ----------
        config : Config, optional
            Pipeline configuration
        configure_logging : bool
            Install console (and optional file) handlers on the package
            logger. Library callers usually leave this to the application.
        """
        self.config = config or get_default_config()

        if configure_logging:
            log_cfg = self.config.logging
            debug_file = self.config.paths.logs_dir / 'debug.log' if log_cfg.debug_file else None
            json_file = self.config.paths.logs_dir / 'analysis.jsonl' if log_cfg.json_file else None
            self.logger = setup_logger(
                level=log_cfg.level, console=log_cfg.console,
                debug_file=debug_file, json_file=json_file,
            )
        else:
            self.logger = get_logger()

        self.report = PipelineLogger(self.logger)
        self.calculator = TOPSISCalculator(self.config.topsis)
        self.output_manager = OutputManager(self.config.output_dir, self.config.export)

    @log_exceptions()
    def run(self, position: Position, candidates: Iterable[Any],
            export: bool = False, created_at: Optional[int] = None) -> PipelineResult:
        """
        Execute the analysis.

        Parameters
        ----------
        position : Position
        candidates : sequence of Candidate or dict
        export : bool
            Also write report, rankings and snapshot files
        created_at : int, optional
            Snapshot timestamp in epoch milliseconds (defaults to now)

        Returns
        -------
        PipelineResult
        """
        start_time = time.time()
        candidates = key_unsaved(as_candidates(candidates))
        attributes = position.attributes

        with log_context(position=position.name):
            self.report.banner(f"TOPSIS ANALYSIS: {position.name}")
            self.report.metrics({'Candidates': len(candidates), 'Attributes': len(attributes)})

            with ProgressLogger(self.logger, "Validation"):
                validation = validate_attributes(attributes).merge(validate(candidates, attributes))
                for err in validation.errors:
                    self.report.step(err, status="warn")
                weights = calculate_weights(attributes, tolerance=self.config.weighting.tolerance,
                                            decimals=self.config.weighting.decimals)
                if not weights.details['valid']:
                    self.report.step(
                        f"Attribute weights sum to {weights.total:.4f}, not 1.0; "
                        f"applying them as given", status="warn"
                    )

            with ProgressLogger(self.logger, "Ranking"):
                result = self.calculator.calculate(candidates, attributes)
                analysis = Analysis.from_result(position.id, result, created_at)
                breakdown = score_breakdown(candidates, attributes, result)
                self.report.ranking(result.rankings, title="Ranking")

            saved_files: Dict[str, str] = {}
            if export:
                with ProgressLogger(self.logger, "Export"):
                    saved_files = self.output_manager.save_all(position, candidates, analysis)

        execution_time = time.time() - start_time
        self.logger.info(f"Analysis completed in {execution_time:.3f} seconds")

        return PipelineResult(
            position=position,
            candidates=candidates,
            result=result,
            analysis=analysis,
            validation=validation,
            weights=weights,
            breakdown=breakdown,
            saved_files=saved_files,
            execution_time=execution_time,
        )


def key_unsaved(candidates: List[Candidate]) -> List[Candidate]:
    """
    Give candidates without an id (e.g. fresh from bulk import) a
    ``row-<input position>`` key that no other candidate uses.
    """
    taken = {c.id for c in candidates if c.id is not None}
    keyed = []
    for i, cand in enumerate(candidates):
        if cand.id is None:
            key, n = f"row-{i}", 1
            while key in taken:
                key, n = f"row-{i}-{n}", n + 1
            taken.add(key)
            cand = Candidate(id=key, name=cand.name, values=cand.values)
        keyed.append(cand)
    return keyed


def run_analysis(position: Position, candidates: Iterable[Any],
                 config: Optional[Config] = None, export: bool = False) -> PipelineResult:
    """Convenience function to run one analysis."""
    return RankingPipeline(config).run(position, candidates, export=export)
