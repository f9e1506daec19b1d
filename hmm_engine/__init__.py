"""
hmm-engine: discrete Hidden Markov Models

Viterbi decoding, forward-probability scoring and Viterbi training of
discrete HMMs over arbitrary state and symbol labels.
"""

__version__ = "0.1.0"

from .config import get_config, set_config
from .logger import (
    get_logger, set_log_level, enable_file_logging, disable_file_logging
)
from .hmm import HiddenMarkovModel, ProbabilityTables, ViterbiResult
from .train import ViterbiTrainer, initialize_model, reestimate

__all__ = [
    "HiddenMarkovModel",
    "ProbabilityTables",
    "ViterbiResult",
    "ViterbiTrainer",
    "initialize_model",
    "reestimate",
    "get_config",
    "set_config",
    "get_logger",
    "set_log_level",
    "enable_file_logging",
    "disable_file_logging",
    "__version__"
]
