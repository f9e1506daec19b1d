"""
Discrete Hidden Markov Model.

This module holds the model data: hidden states (including a final state
that marks the end of a sequence), the symbol alphabet and the initial,
transition and emission probability tables. Every probability lookup for an
unknown state, symbol or pair returns 0, so decoding and scoring treat
impossible moves like any other move with zero weight.
"""

import numpy as np
from typing import Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from .tables import ProbabilityTables
from .viterbi import ViterbiResult, viterbi
from .forward import forward_probability
from .report import format_model, render_model
from ..config import get_config
from ..exceptions import ModelValidationError
from ..logger import get_hmm_logger

logger = get_hmm_logger()


class HiddenMarkovModel:
    """
    Discrete HMM over arbitrary hashable states and symbols.

    The model can be built fully specified, or empty and later populated by
    :func:`hmm_engine.train.initialize_model` or refined by
    :func:`hmm_engine.train.reestimate`. Training only ever swaps the
    probability snapshot; ``states`` and ``symbols`` stay as given.
    """

    def __init__(self,
                 states: Optional[Iterable[Hashable]] = None,
                 final_state: Hashable = '',
                 symbols: Optional[Iterable[Hashable]] = None,
                 initial_probability: Optional[Mapping] = None,
                 transition_probability: Optional[Mapping] = None,
                 emission_probability: Optional[Mapping] = None):
        """
        Initialize the model.

        Args:
            states: Ordered hidden states, final state included
            final_state: State that marks a completed sequence
            symbols: Ordered emission alphabet
            initial_probability: state -> probability
            transition_probability: source -> target -> probability
            emission_probability: state -> symbol -> probability
        """
        self.states: List[Hashable] = list(states or [])
        self.symbols: List[Hashable] = list(symbols or [])
        self._tables = ProbabilityTables.from_mappings(
            initial_probability,
            transition_probability,
            emission_probability,
            final_state
        )

        logger.debug(f"Initialized HiddenMarkovModel with {len(self.states)} states "
                     f"and {len(self.symbols)} symbols")

    @property
    def tables(self) -> ProbabilityTables:
        """Current probability snapshot."""
        return self._tables

    def set_tables(self, tables: ProbabilityTables) -> None:
        """Replace all probability tables and the final-state label at once."""
        self._tables = tables

    @property
    def final_state(self) -> Hashable:
        return self._tables.final_state

    @property
    def initial_probabilities(self) -> Mapping:
        return self._tables.initial

    @property
    def transition_probabilities(self) -> Mapping:
        return self._tables.transition

    @property
    def emission_probabilities(self) -> Mapping:
        return self._tables.emission

    def initial_probability(self, state: Hashable) -> float:
        """Probability that a sequence starts in ``state``."""
        return self._tables.initial_probability(state)

    def transition_probability(self, source: Hashable, target: Hashable) -> float:
        """Probability of moving from ``source`` to ``target``."""
        return self._tables.transition_probability(source, target)

    def emission_probability(self, state: Hashable, symbol: Hashable) -> float:
        """Probability that ``state`` emits ``symbol``."""
        return self._tables.emission_probability(state, symbol)

    def initial_vector(self) -> np.ndarray:
        """
        Initial probabilities in state order.

        Returns:
            pi: Initial state probabilities [n_states]
        """
        return np.array([self.initial_probability(s) for s in self.states], dtype=float)

    def transition_matrix(self) -> np.ndarray:
        """
        Dense transition matrix in state order.

        Returns:
            A: Transition matrix [n_states, n_states] where A[i, j] = P(j | i)
        """
        A = np.zeros((len(self.states), len(self.states)))
        for i, source in enumerate(self.states):
            for j, target in enumerate(self.states):
                A[i, j] = self.transition_probability(source, target)
        return A

    def exit_vector(self) -> np.ndarray:
        """Probability of each state moving into the final state [n_states]."""
        return np.array([self.transition_probability(s, self.final_state) for s in self.states],
                        dtype=float)

    def emission_matrix(self, item: Sequence[Hashable]) -> np.ndarray:
        """
        Emission probabilities of the symbols of ``item``.

        Symbols outside the alphabet simply get a column of zeros.

        Returns:
            E: [len(item), n_states] where E[t, i] = P(item[t] | state i)
        """
        E = np.zeros((len(item), len(self.states)))
        for t, symbol in enumerate(item):
            for i, state in enumerate(self.states):
                E[t, i] = self.emission_probability(state, symbol)
        return E

    def get_parameters(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Get current model parameters as dense arrays.

        Returns:
            Tuple of (pi, A, B) with B over ``symbols`` [n_states, n_symbols]
        """
        B = np.zeros((len(self.states), len(self.symbols)))
        for i, state in enumerate(self.states):
            for k, symbol in enumerate(self.symbols):
                B[i, k] = self.emission_probability(state, symbol)
        return self.initial_vector(), self.transition_matrix(), B

    def validate_stochastic_tables(self, tolerance: Optional[float] = None) -> bool:
        """
        Validate that the probability tables are stochastic.

        Rows that carry no mass at all (states never reached during training,
        and the final state) are accepted. Construction never calls this.

        Args:
            tolerance: Allowed deviation of a sum from 1.0
                (default: ``hmm.validation_tolerance`` from config)

        Returns:
            bool: True if all tables are valid

        Raises:
            ModelValidationError: If any table violates stochastic properties
        """
        if tolerance is None:
            tolerance = get_config('hmm', 'validation_tolerance')

        pi, A, B = self.get_parameters()

        if np.any(pi < 0) or np.any(A < 0) or np.any(B < 0):
            raise ModelValidationError("Probability tables contain negative values")

        if self.states and not np.isclose(pi.sum(), 1.0, atol=tolerance):
            raise ModelValidationError(f"Initial probabilities sum to {pi.sum()}, expected 1.0")

        for name, matrix in (('Transition', A), ('Emission', B)):
            row_sums = matrix.sum(axis=1)
            used = row_sums > 0
            if not np.allclose(row_sums[used], 1.0, atol=tolerance):
                raise ModelValidationError(f"{name} rows don't sum to 1.0: {row_sums}")

        logger.debug("All stochastic table properties validated successfully")
        return True

    def viterbi(self, item: Sequence[Hashable]) -> ViterbiResult:
        """Most likely state path of ``item`` and its probability."""
        return viterbi(self, item)

    def viterbi_approximation(self, item: Sequence[Hashable]) -> float:
        """Viterbi approximation to the probability of generating ``item``."""
        return viterbi(self, item).probability

    def optimal_state_sequence(self, item: Sequence[Hashable]) -> List[Hashable]:
        """Most probable sequence of states generating ``item``."""
        return viterbi(self, item).path

    def forward_probability(self, item: Sequence[Hashable],
                            start_state: Optional[Hashable] = None) -> float:
        """Exact probability of generating ``item``, optionally from a pinned start state."""
        return forward_probability(self, item, start_state)

    def generation_probability(self, item: Sequence[Hashable]) -> float:
        """
        Probability that this model generates ``item``.

        More expensive than :meth:`viterbi_approximation`, which usually
        gives a close lower bound.
        """
        return forward_probability(self, item)

    def to_string(self) -> str:
        return format_model(self)

    def print(self, console=None) -> None:
        """Print the probability tables to the terminal."""
        render_model(self, console)

    def __str__(self) -> str:
        return format_model(self)

    def __repr__(self) -> str:
        return (f"HiddenMarkovModel(n_states={len(self.states)}, "
                f"n_symbols={len(self.symbols)}, final_state={self.final_state!r})")
