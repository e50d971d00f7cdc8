# -*- coding: utf-8 -*-
"""
Weight normalization for position attributes.

Positions are saved only when their weights sum to 1.0 within a tolerance;
these helpers check that invariant and repair a weight set the way the
position editor does.
"""

from dataclasses import replace
from typing import Any, Iterable, List

from ..models import Attribute, as_attributes
from ..mcdm.topsis import round_half_up


def total_weight(attributes: Iterable[Any]) -> float:
    return float(sum(a.weight for a in as_attributes(attributes)))


def weights_are_valid(attributes: Iterable[Any], tolerance: float = 0.01) -> bool:
    """``|Σ w - 1| < tolerance``."""
    return abs(total_weight(attributes) - 1) < tolerance


def normalize_weights(attributes: Iterable[Any], decimals: int = 2) -> List[Attribute]:
    """
    Rescale weights so they sum to 1.

    Each weight is divided by the total and rounded half-up to ``decimals``; the
    rounding remainder is then added to the last attribute so the rounded
    weights sum to exactly 1.

    Parameters
    ----------
    attributes : sequence of Attribute or dict
    decimals : int, default=2

    Returns
    -------
    List[Attribute]
        New attributes; unchanged copies when the total weight is 0.

    Examples
    --------
    >>> [a.weight for a in normalize_weights([Attribute('a', 1), Attribute('b', 1), Attribute('c', 1)])]
    [0.33, 0.33, 0.34]
    """
    attributes = as_attributes(attributes)
    total = total_weight(attributes)
    if total == 0:
        return list(attributes)

    normalized = [replace(a, weight=float(round_half_up(a.weight / total, decimals))) for a in attributes]
    if normalized:
        remainder = 1 - sum(a.weight for a in normalized)
        last = normalized[-1]
        normalized[-1] = replace(last, weight=float(round_half_up(last.weight + remainder, decimals)))
    return normalized


def equal_weights(attributes: Iterable[Any]) -> List[Attribute]:
    """Give every attribute the weight ``1 / n``."""
    attributes = as_attributes(attributes)
    if not attributes:
        return []
    w = 1.0 / len(attributes)
    return [replace(a, weight=w) for a in attributes]
