"""
Viterbi decoding.

Dynamic programming over an L x n_states trellis to find the single most
probable hidden path of an item and its probability.
"""

from typing import Hashable, List, NamedTuple, Sequence

import numpy as np

from .tables import round_probability
from ..exceptions import EmptySequenceError
from ..logger import get_hmm_logger

logger = get_hmm_logger()


class ViterbiResult(NamedTuple):
    """Rounded path probability and the path itself (final state included)."""
    probability: float
    path: List[Hashable]


def _last_argmax(scores: np.ndarray) -> np.ndarray:
    """Index of the maximum along axis 0, preferring the last of equal values."""
    return scores.shape[0] - 1 - np.argmax(scores[::-1], axis=0)


def viterbi(model, item: Sequence[Hashable]) -> ViterbiResult:
    """
    Decode the most probable state path of ``item``.

    Interior steps keep the last examined source state among equally good
    predecessors; the step into the final state does the same. An item no
    state can produce yields probability 0 and the path traced back from the
    last state.

    Args:
        model: HiddenMarkovModel (anything with the dense-view methods)
        item: Observed symbols, at least one

    Returns:
        ViterbiResult with the path of length len(item) + 1

    Raises:
        EmptySequenceError: If item has no symbols
    """
    item = list(item)
    if not item:
        raise EmptySequenceError("Cannot decode an empty item")

    states = list(model.states)
    n_states = len(states)
    if n_states == 0:
        return ViterbiResult(0.0, [model.final_state])

    L = len(item)
    A = model.transition_matrix()
    E = model.emission_matrix(item)
    columns = np.arange(n_states)

    scores = model.initial_vector() * E[0]
    backpointers = np.zeros((L, n_states), dtype=int)

    for t in range(1, L):
        # candidates[i, j]: arrive in state j at time t coming from state i
        candidates = scores[:, np.newaxis] * (A * E[t][np.newaxis, :])
        best = _last_argmax(candidates)
        backpointers[t] = best
        scores = candidates[best, columns]

    exits = scores * model.exit_vector()
    last = int(_last_argmax(exits))
    probability = exits[last]

    path = [states[last]]
    state_index = last
    for t in range(L - 1, 0, -1):
        state_index = backpointers[t, state_index]
        path.append(states[state_index])
    path.reverse()
    path.append(model.final_state)

    result = ViterbiResult(round_probability(probability), path)
    logger.debug(f"Viterbi decoded {L} symbols: probability={result.probability}")
    return result
