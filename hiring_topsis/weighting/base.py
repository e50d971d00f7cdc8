# -*- coding: utf-8 -*-
"""Base classes and utilities for attribute weights."""

import numpy as np
import pandas as pd
from typing import Any, Dict, Iterable
from dataclasses import dataclass

from ..models import as_attributes


@dataclass
class WeightResult:
    """Result container for weight bookkeeping."""
    weights: Dict[str, float]
    method: str
    details: Dict

    @property
    def total(self) -> float:
        return float(sum(self.weights.values()))

    @property
    def as_array(self) -> np.ndarray:
        """Weights in attribute order."""
        return np.array(list(self.weights.values()), dtype=float)

    @property
    def as_series(self) -> pd.Series:
        return pd.Series(self.weights, name='weight')


def calculate_weights(attributes: Iterable[Any], method: str = "manual",
                      tolerance: float = 0.01, decimals: int = 2) -> WeightResult:
    """
    Weights for a position's attributes.

    Parameters
    ----------
    attributes : sequence of Attribute or dict
    method : str
        'manual' (weights as entered), 'normalized' (rescaled to sum to 1,
        two decimals) or 'equal'
    tolerance : float
        Allowed deviation of the total from 1.0
    decimals : int
        Rounding of normalized weights

    Returns
    -------
    WeightResult
    """
    from .normalization import normalize_weights, equal_weights, weights_are_valid

    attributes = as_attributes(attributes)
    if method == "manual":
        adjusted = attributes
    elif method == "normalized":
        adjusted = normalize_weights(attributes, decimals)
    elif method == "equal":
        adjusted = equal_weights(attributes)
    else:
        raise ValueError(f"Unknown method: {method}")

    return WeightResult(
        weights={a.name: a.weight for a in adjusted},
        method=method,
        details={
            'total': float(sum(a.weight for a in adjusted)),
            'valid': weights_are_valid(adjusted, tolerance),
            'tolerance': tolerance,
        }
    )
