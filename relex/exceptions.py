"""Error taxonomy for relation candidate extraction.

Configuration and validation errors are fatal for the enclosing document or
run. ``SinkIOError`` is the exception to that rule: it is raised by the
diagnostics side channel and always caught there, so it never reaches the
training or classification path.
"""


class RelationExtractionError(Exception):
    """Base class for all errors raised by relex."""

    pass


class ConfigurationError(RelationExtractionError, ValueError):
    """Raised before processing when the configuration cannot be used."""

    pass


class FeatureValidationError(RelationExtractionError, ValueError):
    """Raised when an extracted feature carries an undefined value."""

    pass


class ViewResolutionError(RelationExtractionError, KeyError):
    """Raised when a named document view cannot be located."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class SinkIOError(RelationExtractionError, OSError):
    """Raised when the diagnostics destination cannot be opened or written."""

    pass


class MissedPackageException(Exception):
    """Raised when an optional backend package is not installed."""

    pass
