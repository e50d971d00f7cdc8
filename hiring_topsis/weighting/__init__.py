# -*- coding: utf-8 -*-
"""
Attribute Weighting Module
==========================

Weights are chosen by the hiring team, not derived from data. This module
checks the sum-to-one invariant and rescales weight sets.
"""

from .base import WeightResult, calculate_weights
from .normalization import (
    total_weight,
    weights_are_valid,
    normalize_weights,
    equal_weights,
)

__all__ = [
    'WeightResult',
    'calculate_weights',
    'total_weight',
    'weights_are_valid',
    'normalize_weights',
    'equal_weights',
]
