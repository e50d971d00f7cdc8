# -*- coding: utf-8 -*-
"""
Multi-Criteria Decision Making Module
=====================================

TOPSIS ranking of candidates against weighted, directional attributes.

Usage
-----
>>> from hiring_topsis.mcdm import rank
>>> result = rank(candidates, attributes)
>>> result.winner.candidate_name
"""

from .topsis import TOPSISCalculator, rank, round_half_up


__all__ = ['TOPSISCalculator', 'rank', 'round_half_up']
