"""Error taxonomy translated to JSON responses at the request boundary."""


class RecipeIdeasError(Exception):
    """Base error carrying the HTTP status and the caller-safe message."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(RecipeIdeasError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class BadRequestError(RecipeIdeasError):
    status_code = 400


class NotFoundError(RecipeIdeasError):
    status_code = 404


class CuisineNotFoundError(RecipeIdeasError):
    """A cuisine id in a replace-all batch does not exist.

    Reported as 500: it is a referential failure inside a batch write, not a
    missing top-level resource.
    """

    status_code = 500

    def __init__(self, cuisine_id: str):
        super().__init__(f"Cuisine with ID {cuisine_id} not found")
        self.cuisine_id = cuisine_id


class InternalError(RecipeIdeasError):
    status_code = 500
