"""
Exception hierarchy for the joker catalog.

Loading errors (``DatasetLoadError`` and its subclasses) are raised by
the loader and consumed by :class:`DatasetCache`, which either falls
back to the previous snapshot or, when there is none, raises
``DatasetUnavailableError``.  Lookup errors are raised by
``JokerService`` and translated into HTTP status codes by the
endpoints.
"""


class CatalogError(Exception):
    """Base class for every error raised by the catalog core."""


class DatasetLoadError(CatalogError):
    """The source could not be turned into a dataset."""


class DatasetSourceError(DatasetLoadError):
    """The source file could not be read."""


class DatasetParseError(DatasetLoadError):
    """The source bytes are not valid JSON."""


class DatasetSchemaError(DatasetLoadError):
    """The parsed document lacks a list-valued ``records`` field."""


class DatasetUnavailableError(CatalogError):
    """No dataset has ever been loaded successfully."""


class InvalidJokerIdError(CatalogError):
    """The supplied joker id is not an integer."""


class JokerNotFoundError(CatalogError):
    """No joker carries the requested id."""

    def __init__(self, joker_id: int):
        super().__init__(f"Joker with ID {joker_id} not found.")
        self.joker_id = joker_id


class EmptyCatalogError(CatalogError):
    """The catalog holds no jokers."""


class TaxonomyUnavailableError(CatalogError):
    """The dataset was loaded without the requested taxonomy table."""

    def __init__(self, table: str):
        super().__init__(f"Information about {table} is not available.")
        self.table = table
