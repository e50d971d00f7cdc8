# -*- coding: utf-8 -*-
"""
Score Breakdown
===============

Explains a candidate's closeness score attribute by attribute: raw value,
normalized and weighted values, both ideals, and how near the weighted
value sits to the ideal best on a 0-1 scale.
"""

import numpy as np
import pandas as pd
from typing import Any, Dict, Hashable, Iterable, List, Optional
from dataclasses import dataclass, field

from ..models import AnalysisResult, as_attributes, as_candidates


@dataclass
class AttributeContribution:
    """One attribute's row in a candidate breakdown."""
    attribute: str
    weight: float
    beneficial: bool
    raw: float
    normalized: float
    weighted: float
    ideal_best: float
    ideal_worst: float
    closeness_to_ideal: float


@dataclass
class CandidateBreakdown:
    """Per-attribute explanation of one candidate's result."""
    candidate_id: Hashable
    candidate_name: str
    rank: int
    closeness_score: float
    contributions: List[AttributeContribution] = field(default_factory=list)

    @property
    def strongest(self) -> Optional[AttributeContribution]:
        if not self.contributions:
            return None
        return max(self.contributions, key=lambda c: c.closeness_to_ideal)

    @property
    def weakest(self) -> Optional[AttributeContribution]:
        if not self.contributions:
            return None
        return min(self.contributions, key=lambda c: c.closeness_to_ideal)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([vars(c) for c in self.contributions])


def closeness_to_ideal(weighted: float, ideal_best: float, ideal_worst: float) -> float:
    """``1 - |v - A+| / |A+ - A-|`` clipped to [0, 1]; 1 when the column is constant."""
    spread = abs(ideal_best - ideal_worst)
    if spread == 0:
        return 1.0
    return float(np.clip(1 - abs(weighted - ideal_best) / spread, 0.0, 1.0))


def score_breakdown(candidates: Iterable[Any],
                    attributes: Iterable[Any],
                    result: AnalysisResult) -> List[CandidateBreakdown]:
    """
    Build breakdowns for every ranked candidate, in ranking order.

    Parameters
    ----------
    candidates : sequence of Candidate or dict
        The same candidates, in the same order, that produced ``result``
    attributes : sequence of Attribute or dict
    result : AnalysisResult

    Returns
    -------
    List[CandidateBreakdown]
        Contributions are empty when no comparison was performed (single
        candidate or no attributes).
    """
    candidates = as_candidates(candidates)
    attributes = as_attributes(attributes)
    index_of: Dict[Hashable, int] = {}
    for i, cand in enumerate(candidates):
        index_of.setdefault(cand.id, i)

    compared = bool(result.weighted_matrix)
    breakdowns = []
    for r in result.rankings:
        row = index_of.get(r.candidate_id)
        contributions = []
        if compared and row is not None:
            cand = candidates[row]
            for j, attr in enumerate(attributes):
                raw = cand.values.get(attr.name)
                weighted = result.weighted_matrix[row][j]
                best = result.ideal_best[j]
                worst = result.ideal_worst[j]
                contributions.append(AttributeContribution(
                    attribute=attr.name,
                    weight=attr.weight,
                    beneficial=attr.beneficial,
                    raw=0.0 if raw is None else float(raw),
                    normalized=result.normalized_matrix[row][j],
                    weighted=weighted,
                    ideal_best=best,
                    ideal_worst=worst,
                    closeness_to_ideal=closeness_to_ideal(weighted, best, worst),
                ))
        breakdowns.append(CandidateBreakdown(
            candidate_id=r.candidate_id,
            candidate_name=r.candidate_name,
            rank=r.rank,
            closeness_score=r.closeness_score,
            contributions=contributions,
        ))
    return breakdowns


def breakdown_frame(candidates: Iterable[Any],
                    attributes: Iterable[Any],
                    result: AnalysisResult) -> pd.DataFrame:
    """All breakdowns in one long DataFrame (one row per candidate × attribute)."""
    frames = []
    for b in score_breakdown(candidates, attributes, result):
        df = b.to_frame()
        if df.empty:
            continue
        df.insert(0, 'rank', b.rank)
        df.insert(1, 'candidate', b.candidate_name)
        frames.append(df)
    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, ignore_index=True)
