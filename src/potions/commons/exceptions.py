"""Error taxonomy shared by the store, query and web layers."""


class PotionsError(Exception):
    """Base class for application errors."""

    status_code = 500


class ValidationError(PotionsError, ValueError):
    """A caller-supplied parameter is outside its allowed domain."""

    status_code = 400


class NotFoundError(PotionsError):
    """The requested identifier has no matching record."""

    status_code = 404


class StoreError(PotionsError):
    """The underlying data store operation failed."""

    status_code = 500


class AuthenticationError(PotionsError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class ConflictError(PotionsError):
    """A unique key is already taken."""

    status_code = 409
