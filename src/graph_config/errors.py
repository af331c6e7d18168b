"""Error hierarchy for graph-config.

Configuration problems surface when a template is built or an attribute
bundle is encoded. Cardinality problems surface while binding. Missing
data is never an error; it is reported as a BindingDiagnostic instead.
"""

from __future__ import annotations


class GraphConfigError(Exception):
    """Base error for everything raised by graph-config."""


class ConfigurationError(GraphConfigError):
    """A template was assembled from values it cannot use.

    Raised for unnamed or duplicate transform functions.
    """


class AttributeFormatError(ConfigurationError):
    """An attribute bundle could not be encoded into ``key=value`` text."""


class BindingError(GraphConfigError):
    """A transform produced something that is neither a record nor a list of records."""

    def __init__(self, message: str, *, name: str = "") -> None:
        super().__init__(message)
        self.name = name


class CardinalityError(GraphConfigError):
    """Both sides of a relationship resolved to several records (many-to-many)."""

    def __init__(
        self,
        message: str,
        *,
        chain: tuple[str, ...] = (),
        left_count: int = 0,
        right_count: int = 0,
    ) -> None:
        super().__init__(message)
        self.chain = chain
        self.left_count = left_count
        self.right_count = right_count
