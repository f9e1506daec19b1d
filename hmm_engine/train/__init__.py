"""
Training module.

Viterbi-path re-estimation and linear-segmentation initialization.
"""

from .reestimator import ViterbiTrainer, estimate_tables, reestimate
from .initializer import initialize_model, linear_segmentation

__all__ = [
    "ViterbiTrainer",
    "estimate_tables",
    "reestimate",
    "initialize_model",
    "linear_segmentation"
]
