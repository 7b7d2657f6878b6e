"""Domain exceptions for load and combination records."""


class InvalidAppliedLoadError(ValueError):
    """Raised when an applied load document has the wrong structure."""
    pass


class InvalidLoadCombinationError(ValueError):
    """Raised when a load combination document has the wrong structure."""
    pass
