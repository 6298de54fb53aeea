# cart_service/domain/errors.py


class CartError(Exception):
    """Base for errors translated into an HTTP status at the request boundary."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(CartError):
    status_code = 401


class AuthFailure(CartError):
    """Token verification blew up for a reason other than a bad/expired token."""

    status_code = 500


class ValidationError(CartError):
    status_code = 400


class NotFoundError(CartError):
    status_code = 404


class ConflictError(CartError):
    status_code = 409


class StorageError(CartError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
