"""
Bootstrap initialization by linear segmentation.

Spreads the positions of each sample evenly over N numbered states to get a
first path hypothesis, then re-estimates a fresh model from those paths.
"""

from typing import Hashable, List, Optional, Sequence

from ..hmm.model import HiddenMarkovModel
from ..config import get_config
from ..logger import get_training_logger
from .reestimator import ViterbiTrainer

logger = get_training_logger()


def collect_symbols(items: Sequence[Sequence[Hashable]]) -> List[Hashable]:
    """Distinct symbols of all items in first-seen order."""
    symbols = {}
    for item in items:
        for symbol in item:
            symbols.setdefault(symbol, None)
    return list(symbols)


def linear_segmentation(item: Sequence[Hashable], n_states: int,
                        final_state: Hashable) -> List[Hashable]:
    """
    Path assigning position j (1-based) of ``item`` to state floor(j*N/(M+1)) + 1.

    Args:
        item: Sample of M symbols
        n_states: Number of non-final states N
        final_state: Label appended as the last state

    Returns:
        Path of M + 1 states, ending in final_state
    """
    M = len(item)
    path: List[Hashable] = [str(j * n_states // (M + 1) + 1) for j in range(1, M + 1)]
    path.append(final_state)
    return path


def initialize_model(items: Sequence[Sequence[Hashable]],
                     n_states: int,
                     trainer: Optional[ViterbiTrainer] = None,
                     refine: Optional[bool] = None) -> HiddenMarkovModel:
    """
    Build an N-state model (plus final state) from raw samples.

    Args:
        items: Sample symbol sequences
        n_states: Number of non-final states, named "1".."N"
        trainer: ViterbiTrainer to use (default: one built from config)
        refine: Follow the segmentation estimate with decoded-path
            re-estimation (default: ``training.refine_after_segmentation``)

    Returns:
        Trained HiddenMarkovModel; statistics are left on
        ``trainer.training_stats``
    """
    if trainer is None:
        trainer = ViterbiTrainer()
    if refine is None:
        refine = get_config('training', 'refine_after_segmentation')

    items = [list(item) for item in items]
    final_state = trainer.final_state

    states = [str(i) for i in range(1, n_states + 1)]
    states.append(final_state)
    model = HiddenMarkovModel(states=states, final_state=final_state,
                              symbols=collect_symbols(items))

    paths = [linear_segmentation(item, n_states, final_state) for item in items]

    logger.debug(f"Initializing {n_states}-state model from {len(items)} items, "
                 f"{len(model.symbols)} symbols")
    trainer.reestimate(model, items, paths)

    if refine:
        trainer.reestimate(model, items)

    return model
