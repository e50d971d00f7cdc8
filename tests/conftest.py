"""
Pytest configuration and fixtures for candidate ranking tests.
"""
import sys
import logging
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from hiring_topsis.models import Attribute, Candidate, Position
from hiring_topsis.logger import LoggerFactory, LogContext


@pytest.fixture
def sample_attributes():
    """Two beneficial attributes and one cost attribute, weights sum to 1."""
    return [
        Attribute('Skill', 0.5, beneficial=True, min_value=0, max_value=10, value_type='rating'),
        Attribute('Experience', 0.3, beneficial=True),
        Attribute('Salary', 0.2, beneficial=False),
    ]


@pytest.fixture
def sample_candidates():
    """Three candidates with complete values."""
    return [
        Candidate('c1', 'Alice', {'Skill': 9, 'Experience': 5, 'Salary': 90000}),
        Candidate('c2', 'Bob', {'Skill': 7, 'Experience': 8, 'Salary': 70000}),
        Candidate('c3', 'Carol', {'Skill': 5, 'Experience': 3, 'Salary': 50000}),
    ]


@pytest.fixture
def sample_position(sample_attributes):
    return Position('Backend Developer', sample_attributes, description='Python services', id='p1')


@pytest.fixture(autouse=True)
def reset_logging():
    """Each test starts with an unconfigured package logger."""
    yield
    logger = logging.getLogger('hiring_topsis')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.filters.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    LoggerFactory.reset()
    LogContext.clear()
