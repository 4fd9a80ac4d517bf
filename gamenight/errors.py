from haystack.document_stores.errors import DocumentStoreError


class CatalogError(Exception):
    """Parent class for all catalog exceptions."""

    status_code = 500


class InvalidArgumentError(CatalogError, ValueError):
    """Raised when a request is missing required values or carries invalid ones."""

    status_code = 400


class NotFoundError(CatalogError):
    """Raised when an operation targets a game id that is not in the catalog."""

    status_code = 404


class ConflictError(CatalogError):
    """Raised on a duplicate game name or a duplicate owner."""

    status_code = 409


class UnavailableError(CatalogError, DocumentStoreError):
    """Raised when the catalog store cannot be reached or read."""

    status_code = 503
