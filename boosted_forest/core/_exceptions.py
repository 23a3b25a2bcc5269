class FormatError(ValueError):
    """Document not in the expected tree format."""


class UnresolvedFeatureError(Exception):
    """Feature name or index unknown to the feature naming authority.

    The model cannot be used without consistent feature metadata, so this is
    deliberately not a subclass of :class:`FormatError`.
    """


class DataError(Exception):
    """Data not in the expected format."""
