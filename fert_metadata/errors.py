"""Exception types raised by the generator."""


class FertilizerError(RuntimeError):
    """Base class for run-terminating failures."""


class ConfigError(FertilizerError):
    """Missing or invalid run configuration."""


class TransportError(FertilizerError):
    """RPC or subgraph request failed."""


class InvalidTokenError(ValueError):
    """A token record violates the Fertilizer data model."""


class DegenerateTokenError(InvalidTokenError):
    """startBpf == endBpf, so the completion fraction is undefined."""
