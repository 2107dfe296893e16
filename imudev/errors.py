"""Exception taxonomy for layout, windowing and container operations."""


class ImuDevError(Exception):
    """Base class for all errors raised by imudev."""


class ConfigurationError(ImuDevError, ValueError):
    """Invalid constructor arguments or not enough data for a configuration."""


class ShapeMismatch(ImuDevError, ValueError):
    """Operands disagree on axes that are required to match."""


class PolicyError(ImuDevError, ValueError):
    """An iteration policy's sequence-length precondition is violated."""


class IndexOutOfRange(ImuDevError, IndexError):
    """A batch, timepoint or element index is outside its valid bounds."""


class DimensionError(ImuDevError, ValueError):
    """An operation needs a non-empty axis (or a known dimension) that is missing."""
