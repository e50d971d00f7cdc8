# -*- coding: utf-8 -*-
"""
Hiring TOPSIS: Multi-Criteria Candidate Ranking
===============================================

Ranks job candidates for a position with TOPSIS (Technique for Order of
Preference by Similarity to Ideal Solution, Hwang & Yoon, 1981).

Each position defines weighted attributes, each beneficial (higher is
better) or cost (lower is better). Every candidate receives a closeness
score in [0, 1], its distances to both ideals and a competition rank.

Package Structure
-----------------
hiring_topsis/
├── models.py           # Attribute, Candidate, Position, results, snapshots
├── mcdm/
│   └── topsis.py       # TOPSIS ranking engine
├── validation.py       # Candidate and attribute checks
├── weighting/          # Weight bookkeeping
│   ├── base.py         # WeightResult, calculate_weights
│   └── normalization.py
├── analysis/
│   └── breakdown.py    # Per-attribute score breakdown
├── data_loader.py      # Bulk CSV / TSV candidate import
├── output_manager.py   # Audit report, rankings and snapshot export
├── pipeline.py         # Validate, rank, snapshot, export
├── config.py
└── logger.py

Quick Start
-----------
>>> from hiring_topsis import rank
>>> attributes = [
...     {"name": "Skill", "weight": 0.6, "beneficial": True},
...     {"name": "Salary", "weight": 0.4, "beneficial": False},
... ]
>>> candidates = [
...     {"id": "a", "name": "A", "values": {"Skill": 8, "Salary": 50000}},
...     {"id": "b", "name": "B", "values": {"Skill": 6, "Salary": 40000}},
... ]
>>> rank(candidates, attributes).winner.candidate_name
'A'
"""

from .config import (
    Config, TOPSISConfig, WeightingConfig, ImportConfig, ExportConfig,
    LoggingConfig, PathConfig, ValueType,
    get_default_config, get_config, set_config, reset_config,
)
from .logger import (
    setup_logger,
    get_logger,
    get_module_logger,
    ProgressLogger,
    PipelineLogger,
    LoggerFactory,
    log_execution,
    log_exceptions,
    log_context,
    timed_operation,
)
from .models import (
    Attribute, Candidate, Position, RankingResult, AnalysisResult, Analysis,
)
from .mcdm import TOPSISCalculator, rank, round_half_up
from .validation import ValidationResult, validate, validate_attributes, validate_bounds
from .weighting import (
    WeightResult, calculate_weights, total_weight, weights_are_valid,
    normalize_weights, equal_weights,
)
from .analysis import CandidateBreakdown, AttributeContribution, score_breakdown, breakdown_frame
from .data_loader import CandidateImporter, ImportResult, load_candidates, parse_number
from .output_manager import OutputManager, create_output_manager
from .pipeline import RankingPipeline, PipelineResult, run_analysis

__version__ = '1.0.0'

__all__ = [
    # Config
    'Config', 'TOPSISConfig', 'WeightingConfig', 'ImportConfig', 'ExportConfig',
    'LoggingConfig', 'PathConfig', 'ValueType',
    'get_default_config', 'get_config', 'set_config', 'reset_config',
    # Logging
    'setup_logger', 'get_logger', 'get_module_logger', 'ProgressLogger',
    'PipelineLogger', 'LoggerFactory', 'log_execution', 'log_exceptions',
    'log_context', 'timed_operation',
    # Models
    'Attribute', 'Candidate', 'Position', 'RankingResult', 'AnalysisResult', 'Analysis',
    # Engine
    'TOPSISCalculator', 'rank', 'round_half_up',
    # Validation
    'ValidationResult', 'validate', 'validate_attributes', 'validate_bounds',
    # Weighting
    'WeightResult', 'calculate_weights', 'total_weight', 'weights_are_valid',
    'normalize_weights', 'equal_weights',
    # Analysis
    'CandidateBreakdown', 'AttributeContribution', 'score_breakdown', 'breakdown_frame',
    # Import / export
    'CandidateImporter', 'ImportResult', 'load_candidates', 'parse_number',
    'OutputManager', 'create_output_manager',
    # Pipeline
    'RankingPipeline', 'PipelineResult', 'run_analysis',
]
