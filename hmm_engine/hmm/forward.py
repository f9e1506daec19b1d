"""
Forward probability scoring.

The exact probability of an item is the sum, over every hidden path, of the
product of its initial, transition and emission probabilities. It is
decomposed on the first symbol:

    P(seq | s) = emission(s, seq[0]) * transition(s, final)              if len(seq) == 1
    P(seq | s) = emission(s, seq[0]) * sum_s' transition(s, s') P(seq[1:] | s')

and the total is sum_s initial(s) * P(item | s). Each suffix is solved once
for all states at a time, right to left.
"""

from typing import Hashable, Optional, Sequence

import numpy as np

from .tables import round_probability
from ..exceptions import EmptySequenceError
from ..logger import get_hmm_logger

logger = get_hmm_logger()


def suffix_probabilities(model, item: Sequence[Hashable]) -> np.ndarray:
    """
    P(item[t:] | state) for every suffix and state, unrounded.

    Returns:
        beta: [len(item), n_states] where beta[t, i] = P(item[t:] | states[i])
    """
    L = len(item)
    A = model.transition_matrix()
    E = model.emission_matrix(item)

    beta = np.zeros((L, len(model.states)))
    beta[L - 1] = E[L - 1] * model.exit_vector()
    for t in range(L - 2, -1, -1):
        beta[t] = E[t] * (A @ beta[t + 1])
    return beta


def forward_probability(model, item: Sequence[Hashable],
                        start_state: Optional[Hashable] = None) -> float:
    """
    Probability that ``model`` generates ``item``.

    Args:
        model: HiddenMarkovModel
        item: Observed symbols, at least one
        start_state: Pin the first state instead of weighting by the
            initial probabilities; unknown states give 0

    Returns:
        Probability rounded to ``hmm.precision`` digits

    Raises:
        EmptySequenceError: If item has no symbols
    """
    item = list(item)
    if not item:
        raise EmptySequenceError("Cannot score an empty item")

    states = list(model.states)
    if not states:
        return 0.0

    beta = suffix_probabilities(model, item)

    if start_state is None:
        probability = float(model.initial_vector() @ beta[0])
    elif start_state in states:
        probability = float(beta[0, states.index(start_state)])
    else:
        probability = 0.0

    probability = round_probability(probability)
    logger.debug(f"Forward probability of {len(item)} symbols: {probability}")
    return probability
