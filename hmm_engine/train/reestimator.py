"""
Viterbi training.

Re-estimates the probability tables of a model from counts taken along state
paths: either known paths supplied by the caller, or the Viterbi paths of the
items under the current model, recomputed on every pass. Passes repeat until
two consecutive snapshots are equal.
"""

from collections import Counter, defaultdict
from typing import Any, Dict, Hashable, Optional, Sequence

from ..hmm.tables import ProbabilityTables
from ..config import get_config
from ..exceptions import PathMismatchError
from ..logger import get_training_logger

logger = get_training_logger()


def check_paths(items: Sequence[Sequence[Hashable]],
                paths: Sequence[Sequence[Hashable]]) -> None:
    """
    Check that every item has a path one state longer than itself.

    Raises:
        PathMismatchError: If the collections or any item/path pair don't line up
    """
    if len(paths) != len(items):
        raise PathMismatchError(f"Got {len(paths)} paths for {len(items)} items")

    for idx, (item, path) in enumerate(zip(items, paths)):
        if len(path) != len(item) + 1:
            raise PathMismatchError(
                f"Path {idx} has {len(path)} states, expected {len(item) + 1} "
                f"for an item of {len(item)} symbols"
            )


def estimate_tables(items: Sequence[Sequence[Hashable]],
                    paths: Sequence[Sequence[Hashable]],
                    final_state: Hashable) -> ProbabilityTables:
    """
    Maximum-likelihood tables for the given item/path pairs.

    Each step of a path counts once as an outgoing occurrence of its state,
    together with the state it moves to and the symbol it emits there. States
    that never occur as a source get no rows, so they read as zero.

    Args:
        items: Observed symbol sequences
        paths: One state path per item, len(path) == len(item) + 1
        final_state: Final-state label of the new snapshot

    Returns:
        New ProbabilityTables
    """
    initials = Counter(path[0] for path in paths)
    totals = Counter()
    transitions = defaultdict(Counter)
    emissions = defaultdict(Counter)

    for item, path in zip(items, paths):
        for j in range(len(path) - 1):
            source = path[j]
            totals[source] += 1
            transitions[source][path[j + 1]] += 1
            emissions[source][item[j]] += 1

    n_paths = len(paths)
    initial = {state: count / n_paths for state, count in initials.items()}
    transition = {
        source: {target: count / totals[source] for target, count in row.items()}
        for source, row in transitions.items()
    }
    emission = {
        source: {symbol: count / totals[source] for symbol, count in row.items()}
        for source, row in emissions.items()
    }

    return ProbabilityTables(initial, transition, emission, final_state)


class ViterbiTrainer:
    """
    Fixed-point re-estimation of HMM tables.

    Each pass builds a fresh snapshot from path counts and installs it on the
    model; training stops once a pass reproduces the previous snapshot.
    """

    def __init__(self,
                 final_state: Optional[Hashable] = None,
                 max_iterations: Optional[int] = None):
        """
        Initialize ViterbiTrainer.

        Args:
            final_state: Final-state label written by re-estimation
                (default: ``hmm.final_state`` from config)
            max_iterations: Cap on re-estimation passes, None for no cap
                (default: ``training.max_iterations`` from config)
        """
        if final_state is None:
            final_state = get_config('hmm', 'final_state')
        if max_iterations is None:
            max_iterations = get_config('training', 'max_iterations')

        self.final_state = final_state
        self.max_iterations = max_iterations

        # Statistics of the last reestimate() call
        self.training_stats: Dict[str, Any] = {}

        logger.debug(f"ViterbiTrainer initialized: final_state={final_state!r}, "
                     f"max_iterations={max_iterations}")

    def reestimate(self, model,
                   items: Sequence[Sequence[Hashable]],
                   paths: Optional[Sequence[Sequence[Hashable]]] = None) -> Dict[str, Any]:
        """
        Re-estimate ``model`` in place until its tables stop changing.

        Args:
            model: HiddenMarkovModel to refine; its states and symbols are kept
            items: Sample symbol sequences
            paths: Known state paths, one per item. When omitted every pass
                decodes the items with the current tables.

        Returns:
            Dictionary with training statistics:
            - 'converged': Whether a fixed point was reached
            - 'iterations': Number of passes performed
            - 'n_items': Number of items used

        Raises:
            PathMismatchError: If paths don't line up with items
        """
        items = [list(item) for item in items]
        if paths is not None:
            paths = [list(path) for path in paths]
            check_paths(items, paths)

        previous = model.tables
        iterations = 0
        converged = False

        while self.max_iterations is None or iterations < self.max_iterations:
            if paths is None:
                current_paths = [model.viterbi(item).path for item in items]
            else:
                current_paths = paths

            current = estimate_tables(items, current_paths, self.final_state)
            model.set_tables(current)
            iterations += 1

            logger.debug(f"Re-estimation pass {iterations}: "
                         f"{len(current.transition)} source states with transitions")

            if current == previous:
                converged = True
                break
            previous = current

        if converged:
            logger.debug(f"Re-estimation converged after {iterations} passes")
        else:
            logger.warning(f"Re-estimation stopped after {iterations} passes without reaching "
                           f"a fixed point")

        self.training_stats = {
            'converged': converged,
            'iterations': iterations,
            'n_items': len(items)
        }
        return self.training_stats


def reestimate(model,
               items: Sequence[Sequence[Hashable]],
               paths: Optional[Sequence[Sequence[Hashable]]] = None,
               final_state: Optional[Hashable] = None,
               max_iterations: Optional[int] = None) -> Dict[str, Any]:
    """Re-estimate ``model`` in place; see :meth:`ViterbiTrainer.reestimate`."""
    trainer = ViterbiTrainer(final_state=final_state, max_iterations=max_iterations)
    return trainer.reestimate(model, items, paths)
