# -*- coding: utf-8 -*-
"""
Records exchanged with the record store and the presentation layer.

Field names are snake_case in Python; ``to_dict`` / ``from_dict`` use the
camelCase wire shape the record store persists (``candidateId``,
``closenessScore``, ``idealBest`` ...).
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence

import pandas as pd


@dataclass(frozen=True)
class Attribute:
    """A weighted, directional evaluation criterion of a position."""
    name: str
    weight: float
    beneficial: bool = True
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    value_type: str = "number"          # "number" | "rating"

    @property
    def is_cost(self) -> bool:
        return not self.beneficial

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Attribute':
        return cls(
            name=data['name'],
            weight=float(data.get('weight', 0.0)),
            beneficial=bool(data.get('beneficial', True)),
            min_value=data.get('min'),
            max_value=data.get('max'),
            value_type=data.get('type', 'number'),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {
            'name': self.name,
            'type': self.value_type,
            'weight': self.weight,
            'beneficial': self.beneficial,
        }
        if self.min_value is not None:
            out['min'] = self.min_value
        if self.max_value is not None:
            out['max'] = self.max_value
        return out


def _values_from_pairs(pairs: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Collapse ``[{attributeName, value}]`` into a mapping; first entry wins."""
    values: Dict[str, Any] = {}
    for pair in pairs:
        name = pair.get('attributeName')
        if name is not None and name not in values:
            values[name] = pair.get('value')
    return values


@dataclass
class Candidate:
    """An alternative to be ranked, with raw values keyed by attribute name."""
    id: Hashable
    name: str
    values: Dict[str, Any] = field(default_factory=dict)

    def value_for(self, attribute_name: str, default: Any = None) -> Any:
        return self.values.get(attribute_name, default)

    def has_value(self, attribute_name: str) -> bool:
        return attribute_name in self.values

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Candidate':
        """
        Build a candidate from either value representation.

        ``values`` may be a mapping or a list of ``{attributeName, value}``
        pairs; the record store's ``data`` key is accepted as well, and
        ``_id`` is accepted for the identifier.
        """
        raw = data.get('values', data.get('data', {}))
        if isinstance(raw, Mapping):
            values = dict(raw)
        else:
            values = _values_from_pairs(raw)
        cand_id = data['id'] if 'id' in data else data.get('_id')
        return cls(id=cand_id, name=data.get('name', ''), values=values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'data': [{'attributeName': k, 'value': v} for k, v in self.values.items()],
        }


@dataclass
class Position:
    """A job opening: the attribute definitions candidates are judged on."""
    name: str
    attributes: List[Attribute] = field(default_factory=list)
    description: str = ""
    id: Optional[Hashable] = None

    @property
    def attribute_names(self) -> List[str]:
        return [a.name for a in self.attributes]

    def get_attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Position':
        return cls(
            id=data['id'] if 'id' in data else data.get('_id'),
            name=data.get('name', ''),
            description=data.get('description', ''),
            attributes=[Attribute.from_dict(a) for a in data.get('attributes', [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'attributes': [a.to_dict() for a in self.attributes],
        }


@dataclass
class RankingResult:
    """Score and rank of one candidate."""
    candidate_id: Hashable
    candidate_name: str
    closeness_score: float
    distance_to_best: float
    distance_to_worst: float
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'candidateId': self.candidate_id,
            'candidateName': self.candidate_name,
            'closenessScore': self.closeness_score,
            'distanceToBest': self.distance_to_best,
            'distanceToWorst': self.distance_to_worst,
            'rank': self.rank,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RankingResult':
        return cls(
            candidate_id=data['candidateId'],
            candidate_name=data['candidateName'],
            closeness_score=float(data['closenessScore']),
            distance_to_best=float(data['distanceToBest']),
            distance_to_worst=float(data['distanceToWorst']),
            rank=int(data['rank']),
        )


@dataclass
class AnalysisResult:
    """
    Output of one TOPSIS run.

    ``rankings`` are in final order. The matrices keep the candidates'
    input order (row ``i`` is input candidate ``i``).
    """
    rankings: List[RankingResult] = field(default_factory=list)
    ideal_best: List[float] = field(default_factory=list)
    ideal_worst: List[float] = field(default_factory=list)
    normalized_matrix: List[List[float]] = field(default_factory=list)
    weighted_matrix: List[List[float]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rankings

    @property
    def winner(self) -> Optional[RankingResult]:
        return self.rankings[0] if self.rankings else None

    def ranking_for(self, candidate_id: Hashable) -> Optional[RankingResult]:
        for r in self.rankings:
            if r.candidate_id == candidate_id:
                return r
        return None

    def to_frame(self) -> pd.DataFrame:
        """Rankings as a DataFrame in final order."""
        columns = ['Rank', 'Candidate', 'Score', 'DistanceToBest', 'DistanceToWorst']
        return pd.DataFrame([
            (r.rank, r.candidate_name, r.closeness_score,
             r.distance_to_best, r.distance_to_worst)
            for r in self.rankings
        ], columns=columns)

    def top_n(self, n: int = 10) -> pd.DataFrame:
        return self.to_frame().head(n)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rankings': [r.to_dict() for r in self.rankings],
            'idealBest': list(self.ideal_best),
            'idealWorst': list(self.ideal_worst),
            'normalizedMatrix': [list(row) for row in self.normalized_matrix],
            'weightedMatrix': [list(row) for row in self.weighted_matrix],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'AnalysisResult':
        return cls(
            rankings=[RankingResult.from_dict(r) for r in data.get('rankings', [])],
            ideal_best=list(data.get('idealBest', [])),
            ideal_worst=list(data.get('idealWorst', [])),
            normalized_matrix=[list(r) for r in data.get('normalizedMatrix', [])],
            weighted_matrix=[list(r) for r in data.get('weightedMatrix', [])],
        )

    def summary(self) -> str:
        lines = [
            f"\n{'='*60}",
            "TOPSIS RESULTS",
            f"{'='*60}",
            f"\nCandidates: {len(self.rankings)}",
            f"Attributes: {len(self.ideal_best)}",
        ]
        if self.rankings:
            lines.append("\nTop 10 Candidates:")
            for r in self.rankings[:10]:
                lines.append(f"  {r.rank}. {r.candidate_name}: Score={r.closeness_score:.4f}")
        lines.append("=" * 60)
        return "\n".join(lines)


@dataclass(frozen=True)
class Analysis:
    """Immutable snapshot of an analysis run, tied to a position."""
    position_id: Optional[Hashable]
    results: Sequence[RankingResult]
    ideal_best: Sequence[float]
    ideal_worst: Sequence[float]
    normalized_matrix: Sequence[Sequence[float]] = ()
    weighted_matrix: Sequence[Sequence[float]] = ()
    created_at: int = 0                 # epoch milliseconds

    @classmethod
    def from_result(cls, position_id: Optional[Hashable], result: AnalysisResult,
                    created_at: Optional[int] = None) -> 'Analysis':
        if created_at is None:
            created_at = int(time.time() * 1000)
        return cls(
            position_id=position_id,
            results=tuple(result.rankings),
            ideal_best=tuple(result.ideal_best),
            ideal_worst=tuple(result.ideal_worst),
            normalized_matrix=tuple(tuple(r) for r in result.normalized_matrix),
            weighted_matrix=tuple(tuple(r) for r in result.weighted_matrix),
            created_at=created_at,
        )

    def to_result(self) -> AnalysisResult:
        return AnalysisResult(
            rankings=list(self.results),
            ideal_best=list(self.ideal_best),
            ideal_worst=list(self.ideal_worst),
            normalized_matrix=[list(r) for r in self.normalized_matrix],
            weighted_matrix=[list(r) for r in self.weighted_matrix],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'positionId': self.position_id,
            'results': [r.to_dict() for r in self.results],
            'idealBest': list(self.ideal_best),
            'idealWorst': list(self.ideal_worst),
            'normalizedMatrix': [list(r) for r in self.normalized_matrix],
            'weightedMatrix': [list(r) for r in self.weighted_matrix],
            'createdAt': self.created_at,
        }


def as_attributes(items: Iterable[Any]) -> List[Attribute]:
    """Accept ``Attribute`` objects or wire dicts."""
    return [a if isinstance(a, Attribute) else Attribute.from_dict(a) for a in items or []]


def as_candidates(items: Iterable[Any]) -> List[Candidate]:
    """Accept ``Candidate`` objects or wire dicts."""
    return [c if isinstance(c, Candidate) else Candidate.from_dict(c) for c in items or []]


__all__ = [
    'Attribute', 'Candidate', 'Position', 'RankingResult',
    'AnalysisResult', 'Analysis', 'as_attributes', 'as_candidates',
]
