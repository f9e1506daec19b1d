"""
Test configuration and fixtures for hmm-engine.

This file contains pytest configuration and shared fixtures
for testing the hmm_engine package.
"""

import pytest
import tempfile
from pathlib import Path

from hmm_engine.config import reset_config
from hmm_engine.hmm.model import HiddenMarkovModel


@pytest.fixture(autouse=True)
def restore_config():
    """Undo configuration changes made by a test."""
    yield
    reset_config()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def chain_model():
    """Three-state chain model with final state F over symbols a, b, c."""
    return HiddenMarkovModel(
        states=['1', '2', '3', 'F'],
        final_state='F',
        symbols=['a', 'b', 'c'],
        initial_probability={'1': 1},
        transition_probability={
            '1': {'1': 0.2, '2': 0.5, '3': 0.3},
            '2': {'1': 0.1, '3': 0.9},
            '3': {'3': 0.4, 'F': 0.6}
        },
        emission_probability={
            '1': {'b': 0.3, 'c': 0.7},
            '2': {'a': 0.3, 'b': 0.6, 'c': 0.1},
            '3': {'a': 1}
        }
    )


@pytest.fixture
def sample_items():
    """Observed items used across decoding and training tests."""
    return {
        'possible': ['b', 'c', 'b', 'a'],
        'impossible': ['b', 'c', 'b', 'b'],
        'unseen_symbol': ['b', 'c', 'b', 'd'],
        'words': ['white', 'bottle']
    }


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
