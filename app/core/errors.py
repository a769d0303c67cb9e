"""Error taxonomy for the query engine and auth gate."""


class RecipeAPIError(Exception):
    """Base class for expected, caller-correctable failures."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(RecipeAPIError):
    """A parameter is missing or malformed."""

    status_code = 400


class Unauthenticated(RecipeAPIError):
    """No credential was presented."""

    status_code = 401


class Forbidden(RecipeAPIError):
    """A credential was presented but is unknown or inactive."""

    status_code = 403


class NotFound(RecipeAPIError):
    """A well-formed single-entity lookup matched nothing."""

    status_code = 404
