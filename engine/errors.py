"""Exceptions raised by the suggestion engine and its loaders."""


class InvalidArgumentError(ValueError):
    """A required input is missing or violates its contract."""


class CatalogError(ValueError):
    """The maintenance task catalog is malformed."""


class LogbookError(ValueError):
    """A logbook file does not match the logbook schema."""
