"""Exceptions raised while generating random forests."""


class GraphGenerationError(Exception):
    """Raised when forest generation fails after all retry attempts."""


class DegreeSequenceError(GraphGenerationError):
    """Raised when no graphic degree sequence is drawn within the attempt budget."""


class PrecisionLossError(GraphGenerationError):
    """Raised when SIS edge selection runs past the last candidate pair.

    The cumulative weights fell short of the sampled level because of
    floating point error. The current generation attempt is unusable.
    """
