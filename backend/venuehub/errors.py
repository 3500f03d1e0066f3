"""
Error taxonomy shared by services, providers and routes.

Every error carries the HTTP status the API reports for it. Routes catch
AppError and answer {"error": message} with that status; any other exception
is an unexpected failure, logged and reduced to a generic 500.
"""

from flask import jsonify


UNEXPECTED_ERROR = "An unexpected error occurred"


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(AppError):
    """No valid session."""
    status_code = 401


class InvalidCredentials(Unauthorized):
    """Sign-in rejected by the auth provider."""


class Forbidden(AppError):
    """Session present but role or tenant does not allow the operation."""
    status_code = 403


class NotFound(AppError):
    status_code = 404


class ValidationError(AppError, ValueError):
    """400-level input problem."""
    status_code = 400


class BackendError(AppError):
    """Data store or auth service failure. The message is the provider's own."""
    status_code = 400


def error_response(exc: AppError):
    return jsonify({"error": exc.message}), exc.status_code


def unexpected_response():
    return jsonify({"error": UNEXPECTED_ERROR}), 500
