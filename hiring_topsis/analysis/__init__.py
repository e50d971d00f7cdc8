# -*- coding: utf-8 -*-
"""Analysis of TOPSIS results for reporting."""

from .breakdown import (
    AttributeContribution,
    CandidateBreakdown,
    closeness_to_ideal,
    score_breakdown,
    breakdown_frame,
)

__all__ = [
    'AttributeContribution',
    'CandidateBreakdown',
    'closeness_to_ideal',
    'score_breakdown',
    'breakdown_frame',
]
