# -*- coding: utf-8 -*-
"""Advisory validation of candidate data and attribute definitions."""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from .config import ValueType
from .models import as_attributes, as_candidates


@dataclass
class ValidationResult:
    """Result container for validation checks."""
    valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> 'ValidationResult':
        return cls(valid=not errors, errors=list(errors))

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        return ValidationResult.from_errors(self.errors + other.errors)

    @property
    def summary(self) -> str:
        if self.valid:
            return "Validation: OK"
        lines = [f"Validation: {len(self.errors)} error(s)"]
        lines.extend(f"  - {e}" for e in self.errors)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {'valid': self.valid, 'errors': list(self.errors)}


def is_finite_number(value: Any) -> bool:
    """Real, finite and not a bool."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def validate(candidates: Iterable[Any], attributes: Iterable[Any]) -> ValidationResult:
    """
    Check that every candidate has a finite numeric value for every attribute.

    Errors are reported in candidate order, then attribute order. This is
    advisory: ``rank`` still defaults missing values to 0.

    Parameters
    ----------
    candidates : sequence of Candidate or dict
    attributes : sequence of Attribute or dict

    Returns
    -------
    ValidationResult
    """
    candidates = as_candidates(candidates)
    attributes = as_attributes(attributes)
    errors = []

    for cand in candidates:
        for attr in attributes:
            if not cand.has_value(attr.name):
                errors.append(f'{cand.name} is missing value for "{attr.name}"')
            elif not is_finite_number(cand.values[attr.name]):
                errors.append(f'{cand.name} has invalid value for "{attr.name}"')

    return ValidationResult.from_errors(errors)


def validate_attributes(attributes: Iterable[Any]) -> ValidationResult:
    """Check attribute definitions: names, weights, bounds and value types."""
    attributes = as_attributes(attributes)
    errors = []
    seen = set()
    allowed_types = {t.value for t in ValueType}

    for idx, attr in enumerate(attributes, 1):
        label = f'"{attr.name}"' if attr.name else f"Attribute {idx}"
        if not attr.name or not str(attr.name).strip():
            errors.append(f"Attribute {idx}: name is empty")
        elif attr.name in seen:
            errors.append(f"{label}: duplicate attribute name")
        seen.add(attr.name)

        if not is_finite_number(attr.weight):
            errors.append(f"{label}: weight must be a number")
        elif not 0 <= attr.weight <= 1:
            errors.append(f"{label}: weight must be between 0 and 1 (got {attr.weight})")

        if (attr.min_value is not None and attr.max_value is not None
                and attr.min_value > attr.max_value):
            errors.append(f"{label}: min ({attr.min_value}) is greater than max ({attr.max_value})")

        if attr.value_type not in allowed_types:
            errors.append(f"{label}: unknown type '{attr.value_type}'")

    return ValidationResult.from_errors(errors)


def validate_bounds(candidates: Iterable[Any], attributes: Iterable[Any]) -> ValidationResult:
    """Check present numeric values against each attribute's min / max."""
    candidates = as_candidates(candidates)
    attributes = as_attributes(attributes)
    errors = []

    for cand in candidates:
        for attr in attributes:
            value = cand.values.get(attr.name)
            if not is_finite_number(value):
                continue
            if attr.min_value is not None and value < attr.min_value:
                errors.append(f'{cand.name}: "{attr.name}" must be at least {attr.min_value}')
            elif attr.max_value is not None and value > attr.max_value:
                errors.append(f'{cand.name}: "{attr.name}" must be at most {attr.max_value}')

    return ValidationResult.from_errors(errors)


__all__ = [
    'ValidationResult', 'validate', 'validate_attributes',
    'validate_bounds', 'is_finite_number',
]
