# -*- coding: utf-8 -*-
"""Configuration management for the candidate ranking engine."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Union
from enum import Enum
import json


class ValueType(Enum):
    """Attribute value kinds understood by the record store."""
    NUMBER = "number"
    RATING = "rating"


@dataclass
class PathConfig:
    """File and directory paths configuration."""
    base_dir: Path = field(default_factory=lambda: Path.cwd())

    @property
    def output_dir(self) -> Path:
        return self.base_dir / "outputs"

    @property
    def reports_dir(self) -> Path:
        return self.output_dir / "reports"

    @property
    def results_dir(self) -> Path:
        return self.output_dir / "results"

    @property
    def logs_dir(self) -> Path:
        return self.output_dir / "logs"

    def ensure_directories(self) -> None:
        """Create all output directories."""
        for d in [self.output_dir, self.reports_dir, self.results_dir, self.logs_dir]:
            d.mkdir(parents=True, exist_ok=True)


@dataclass
class TOPSISConfig:
    """TOPSIS engine configuration.

    The defaults reproduce previously stored analyses exactly; changing
    them changes rankings.
    """
    precision: int = 4
    neutral_score: float = 0.5           # dB + dW == 0
    single_candidate_score: float = 1.0
    missing_value: float = 0.0
    round_ideals: bool = False          # True matches the legacy report layout


@dataclass
class WeightingConfig:
    """Attribute weight bookkeeping."""
    tolerance: float = 0.01
    decimals: int = 2


@dataclass
class ImportConfig:
    """Bulk candidate import settings."""
    delimiters: str = ",\t"
    name_header: str = "Name"


@dataclass
class ExportConfig:
    """Report and result export settings."""
    float_precision: int = 4
    score_percent_decimals: int = 1
    file_prefix: str = "topsis"
    date_format: str = "%Y-%m-%d"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    console: bool = True
    debug_file: bool = False
    json_file: bool = False


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    paths: PathConfig = field(default_factory=PathConfig)
    topsis: TOPSISConfig = field(default_factory=TOPSISConfig)
    weighting: WeightingConfig = field(default_factory=WeightingConfig)
    importing: ImportConfig = field(default_factory=ImportConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def output_dir(self) -> str:
        """Get output directory path as string."""
        return str(self.paths.output_dir)

    def to_dict(self) -> Dict:
        def _to_dict(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: _to_dict(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, list):
                return [_to_dict(i) for i in obj]
            elif isinstance(obj, dict):
                return {k: _to_dict(v) for k, v in obj.items()}
            return obj
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Config':
        """Build a configuration from ``to_dict`` output; unknown keys are ignored."""
        config = cls()
        for section in fields(cls):
            values = data.get(section.name)
            if not isinstance(values, dict):
                continue
            target = getattr(config, section.name)
            for key, value in values.items():
                if not hasattr(target, key):
                    continue
                current = getattr(target, key)
                if isinstance(current, Enum):
                    value = type(current)(value)
                elif isinstance(current, Path):
                    value = Path(value)
                setattr(target, key, value)
        return config

    def save(self, filepath: Union[str, Path]) -> None:
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'Config':
        with open(filepath, 'r') as f:
            return cls.from_dict(json.load(f))

    def summary(self) -> str:
        return f"""
{'='*60}
CONFIGURATION SUMMARY - TOPSIS Candidate Ranking
{'='*60}

ENGINE:
  Precision: {self.topsis.precision} decimals
  Neutral score: {self.topsis.neutral_score}
  Single candidate score: {self.topsis.single_candidate_score}
  Missing value default: {self.topsis.missing_value}

WEIGHTS:
  Sum tolerance: ±{self.weighting.tolerance}

OUTPUT:
  Directory: {self.output_dir}
  Float precision: {self.export.float_precision}
{'='*60}
"""


_config: Optional[Config] = None

def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config

def get_default_config() -> Config:
    """Get a fresh default configuration."""
    return Config()

def set_config(config: Config) -> None:
    global _config
    _config = config

def reset_config() -> None:
    global _config
    _config = Config()


__all__ = [
    'ValueType',
    'PathConfig', 'TOPSISConfig', 'WeightingConfig', 'ImportConfig',
    'ExportConfig', 'LoggingConfig', 'Config',
    'get_config', 'get_default_config', 'set_config', 'reset_config',
]
