"""
Hidden Markov Model module.

Discrete HMM data model with Viterbi decoding and forward-probability scoring.
"""

from .tables import ProbabilityTables, round_probability
from .model import HiddenMarkovModel
from .viterbi import ViterbiResult, viterbi
from .forward import forward_probability

__all__ = [
    "HiddenMarkovModel",
    "ProbabilityTables",
    "ViterbiResult",
    "viterbi",
    "forward_probability",
    "round_probability"
]
