"""
Exception hierarchy for hmm-engine.

Probability lookups never raise; these cover malformed call arguments only.
"""


class HMMEngineError(Exception):
    """Base exception for hmm-engine."""
    pass


class EmptySequenceError(HMMEngineError, ValueError):
    """An item with no symbols was given to a decoder or scorer."""
    pass


class PathMismatchError(HMMEngineError, ValueError):
    """Known paths do not line up with the items they describe."""
    pass


class ModelValidationError(HMMEngineError, ValueError):
    """Probability tables violate stochastic properties."""
    pass
