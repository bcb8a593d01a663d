"""Error types raised at the boundaries of apibump.

The diff kernel itself raises nothing for well-formed snapshots. These
errors come from loading inputs and reading configuration.
"""


class ApiBumpError(Exception):
    """Base class for apibump errors."""
    pass


class SnapshotLoadError(ApiBumpError, ValueError):
    """Raised when a snapshot cannot be read, parsed or validated.

    The underlying exception (OSError, JSONDecodeError, pydantic
    ValidationError) is chained as ``__cause__``.
    """

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class ConfigError(ApiBumpError, ValueError):
    """Raised when settings from the environment or overrides are invalid."""
    pass
