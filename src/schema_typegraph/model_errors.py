"""Root of the schema model error hierarchy."""


class ModelError(Exception):
    """Base class for every schema build, lookup and construction failure."""
