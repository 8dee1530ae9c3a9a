"""Error types raised by the network core.

Both are recoverable and subclass ValueError so callers that already guard
against bad values keep working.
"""


class FormatError(ValueError):
    """Persisted network/matrix text is malformed.

    Raised for a wrong column count, an unparsable number, missing rows, or
    an unparsable count header.
    """


class DimensionError(ValueError):
    """Input vector length does not match the network's input width."""
