"""
Probability table snapshots.

A ``ProbabilityTables`` value bundles the initial, transition and emission
mappings of a model together with its final-state label. Re-estimation
produces a new snapshot per pass instead of editing tables in place, and
compares consecutive snapshots to detect the fixed point.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Hashable, Mapping, Optional

from ..config import get_config

State = Hashable
Symbol = Hashable


def _copy_rows(table: Optional[Mapping]) -> Dict:
    """Copy a two-level mapping into plain dicts."""
    if not table:
        return {}
    return {key: dict(row) for key, row in table.items()}


def _read_only_rows(table: Mapping) -> Mapping:
    """Read-only copy of a two-level mapping."""
    return MappingProxyType({key: MappingProxyType(dict(row)) for key, row in table.items()})


def _nonzero(row: Mapping) -> Dict:
    return {key: value for key, value in row.items() if value}


def _nonzero_rows(table: Mapping) -> Dict:
    rows = {}
    for key, row in table.items():
        kept = _nonzero(row)
        if kept:
            rows[key] = kept
    return rows


@dataclass(frozen=True, eq=False)
class ProbabilityTables:
    """
    Immutable snapshot of the three probability tables of a model.

    Missing entries at any nesting level read as probability 0, and two
    snapshots compare equal when they agree on every non-zero entry, so an
    explicit 0 and an absent key are the same thing.

    The mappings are copied on construction and exposed read-only, so a
    snapshot never changes after it is built.
    """

    initial: Mapping[State, float] = field(default_factory=dict)
    transition: Mapping[State, Mapping[State, float]] = field(default_factory=dict)
    emission: Mapping[State, Mapping[Symbol, float]] = field(default_factory=dict)
    final_state: State = ''

    def __post_init__(self):
        object.__setattr__(self, 'initial', MappingProxyType(dict(self.initial)))
        object.__setattr__(self, 'transition', _read_only_rows(self.transition))
        object.__setattr__(self, 'emission', _read_only_rows(self.emission))

    @classmethod
    def from_mappings(cls,
                      initial: Optional[Mapping] = None,
                      transition: Optional[Mapping] = None,
                      emission: Optional[Mapping] = None,
                      final_state: State = '') -> 'ProbabilityTables':
        """Build a snapshot from caller-owned mappings; ``None`` means empty."""
        return cls(
            initial=initial or {},
            transition=transition or {},
            emission=emission or {},
            final_state=final_state
        )

    def initial_probability(self, state: State) -> float:
        return self.initial.get(state) or 0.0

    def transition_probability(self, source: State, target: State) -> float:
        row = self.transition.get(source)
        if row:
            return row.get(target) or 0.0
        return 0.0

    def emission_probability(self, state: State, symbol: Symbol) -> float:
        row = self.emission.get(state)
        if row:
            return row.get(symbol) or 0.0
        return 0.0

    def as_dict(self) -> Dict[str, Any]:
        """Plain-dict copy of the snapshot, for callers that serialize models."""
        return {
            'initial': dict(self.initial),
            'transition': _copy_rows(self.transition),
            'emission': _copy_rows(self.emission),
            'final_state': self.final_state
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProbabilityTables):
            return NotImplemented
        return (self.final_state == other.final_state
                and _nonzero(self.initial) == _nonzero(other.initial)
                and _nonzero_rows(self.transition) == _nonzero_rows(other.transition)
                and _nonzero_rows(self.emission) == _nonzero_rows(other.emission))

    __hash__ = None


def round_probability(value: float, precision: Optional[int] = None) -> float:
    """
    Round a probability for reporting.

    Uses Python's ``round`` on the binary value, so exact ties go to even.
    ``precision`` defaults to ``hmm.precision`` from config.
    """
    if precision is None:
        precision = get_config('hmm', 'precision')
    return round(float(value), precision)
