# -*- coding: utf-8 -*-
"""
TOPSIS Implementation
=====================

Technique for Order of Preference by Similarity to Ideal Solution, used to
rank candidates against the weighted attributes of a position.

Steps
-----
1. Decision matrix (candidates × attributes, input order; missing → 0)
2. Vector normalization per column (zero column → denominator 1)
3. Weighting (weights applied exactly as supplied)
4. Ideal best / ideal worst per column (swapped for cost attributes)
5. Euclidean distances to both ideals
6. Closeness  C = d⁻ / (d⁺ + d⁻)   (0.5 when d⁺ + d⁻ == 0)
7. Half-up rounding of scores and distances to 4 decimals
8. Stable sort by score, competition ranking (1, 1, 3)

References
----------
[1] Hwang, C.L. & Yoon, K. (1981). Multiple Attribute Decision Making:
    Methods and Applications. Springer-Verlag.
"""

import numpy as np
from typing import Any, Iterable, List, Optional, Sequence, Tuple
from scipy.stats import rankdata

from ..config import TOPSISConfig
from ..logger import get_module_logger
from ..models import (
    Attribute, Candidate, RankingResult, AnalysisResult,
    as_attributes, as_candidates,
)


logger = get_module_logger('mcdm.topsis')


def round_half_up(values, decimals: int = 4) -> np.ndarray:
    """Round half away from -inf, matching the scores already on record."""
    factor = 10.0 ** decimals
    return np.floor(np.asarray(values, dtype=float) * factor + 0.5) / factor


class TOPSISCalculator:
    """
    TOPSIS calculator for candidate ranking.

    Stateless: a calculator may be shared between threads and reused for
    any number of positions.

    Parameters
    ----------
    config : TOPSISConfig, optional
        Rounding precision and edge-case scores
    """

    def __init__(self, config: Optional[TOPSISConfig] = None):
        self.config = config or TOPSISConfig()

    def calculate(self,
                  candidates: Iterable[Any],
                  attributes: Iterable[Any]) -> AnalysisResult:
        """
        Rank candidates.

        Parameters
        ----------
        candidates : sequence of Candidate or dict
            Alternatives in input order
        attributes : sequence of Attribute or dict
            Criteria in input order

        Returns
        -------
        AnalysisResult
            Rankings in final order plus ideal vectors and the
            normalized / weighted matrices in input order
        """
        candidates = as_candidates(candidates)
        attributes = as_attributes(attributes)
        cfg = self.config

        if not candidates:
            return AnalysisResult()

        if len(candidates) == 1:
            only = candidates[0]
            return AnalysisResult(rankings=[RankingResult(
                candidate_id=only.id,
                candidate_name=only.name,
                closeness_score=cfg.single_candidate_score,
                distance_to_best=0.0,
                distance_to_worst=0.0,
                rank=1,
            )])

        if not attributes:
            return AnalysisResult(rankings=[
                RankingResult(
                    candidate_id=c.id,
                    candidate_name=c.name,
                    closeness_score=cfg.neutral_score,
                    distance_to_best=0.0,
                    distance_to_worst=0.0,
                    rank=i + 1,
                )
                for i, c in enumerate(candidates)
            ])

        weights = np.array([a.weight for a in attributes], dtype=float)
        beneficial = np.array([bool(a.beneficial) for a in attributes])

        X = self.build_decision_matrix(candidates, attributes)
        norm = self.normalize(X)
        weighted = self.apply_weights(norm, weights)
        ideal_best, ideal_worst = self.ideal_solutions(weighted, beneficial)
        d_best, d_worst = self.distances(weighted, ideal_best, ideal_worst)
        scores = self.closeness_scores(d_best, d_worst)

        scores_r = round_half_up(scores, cfg.precision)
        d_best_r = round_half_up(d_best, cfg.precision)
        d_worst_r = round_half_up(d_worst, cfg.precision)

        order, ranks = self.assign_ranks(scores_r)
        rankings = [
            RankingResult(
                candidate_id=candidates[i].id,
                candidate_name=candidates[i].name,
                closeness_score=float(scores_r[i]),
                distance_to_best=float(d_best_r[i]),
                distance_to_worst=float(d_worst_r[i]),
                rank=int(ranks[i]),
            )
            for i in order
        ]

        if cfg.round_ideals:
            ideal_best = round_half_up(ideal_best, cfg.precision)
            ideal_worst = round_half_up(ideal_worst, cfg.precision)

        logger.debug(
            f"TOPSIS: {len(candidates)} candidates × {len(attributes)} attributes, "
            f"top score = {rankings[0].closeness_score:.4f}"
        )

        return AnalysisResult(
            rankings=rankings,
            ideal_best=ideal_best.tolist(),
            ideal_worst=ideal_worst.tolist(),
            normalized_matrix=norm.tolist(),
            weighted_matrix=weighted.tolist(),
        )

    def build_decision_matrix(self,
                              candidates: Sequence[Candidate],
                              attributes: Sequence[Attribute]) -> np.ndarray:
        """Raw values, rows in candidate order and columns in attribute order."""
        missing = self.config.missing_value
        # TODO: report defaulted cells once a policy for missing values is agreed
        X = np.empty((len(candidates), len(attributes)), dtype=float)
        for i, cand in enumerate(candidates):
            for j, attr in enumerate(attributes):
                value = cand.values.get(attr.name)
                X[i, j] = missing if value is None else float(value)
        return X

    def normalize(self, X: np.ndarray) -> np.ndarray:
        """Vector normalization: each column divided by its Euclidean norm."""
        denom = np.sqrt((X ** 2).sum(axis=0))
        denom[(denom == 0) | np.isnan(denom)] = 1
        return X / denom

    def apply_weights(self, norm: np.ndarray, weights: np.ndarray) -> np.ndarray:
        return norm * weights

    def ideal_solutions(self, weighted: np.ndarray,
                        beneficial: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Ideal best (A+) and ideal worst (A-) per column."""
        col_max = weighted.max(axis=0)
        col_min = weighted.min(axis=0)
        ideal_best = np.where(beneficial, col_max, col_min)
        ideal_worst = np.where(beneficial, col_min, col_max)
        return ideal_best, ideal_worst

    def distances(self, weighted: np.ndarray, ideal_best: np.ndarray,
                  ideal_worst: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Euclidean distance of every row to both ideals."""
        d_best = np.sqrt(((weighted - ideal_best) ** 2).sum(axis=1))
        d_worst = np.sqrt(((weighted - ideal_worst) ** 2).sum(axis=1))
        return d_best, d_worst

    def closeness_scores(self, d_best: np.ndarray, d_worst: np.ndarray) -> np.ndarray:
        """Relative closeness; undecidable rows get the neutral score."""
        denom = d_best + d_worst
        scores = np.full(denom.shape, self.config.neutral_score, dtype=float)
        np.divide(d_worst, denom, out=scores, where=denom != 0)
        return scores

    def assign_ranks(self, scores: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Final order and competition ranks.

        Returns
        -------
        order : np.ndarray
            Input indices sorted by score descending; equal scores keep
            input order
        ranks : np.ndarray
            Rank per input index: 1 + number of strictly higher scores.
            NaN scores (from non-finite inputs) rank below every number
            and tie with each other.
        """
        key = -np.where(np.isnan(scores), -np.inf, scores)
        order = np.argsort(key, kind='stable')
        ranks = rankdata(key, method='min').astype(int)
        return order, ranks


def rank(candidates: Iterable[Any],
         attributes: Iterable[Any],
         config: Optional[TOPSISConfig] = None) -> AnalysisResult:
    """Rank candidates against attributes with TOPSIS."""
    return TOPSISCalculator(config).calculate(candidates, attributes)


__all__ = ['TOPSISCalculator', 'rank', 'round_half_up']
