# finance_analyzer/core/exceptions.py
"""
Domain errors raised by the CRUD layer, the token service and the CSV
import pipeline. Each carries the HTTP status the API renders it with.
"""
from fastapi import status


class FinanceAnalyzerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FinanceAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(FinanceAnalyzerError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundOrForbiddenError(FinanceAnalyzerError):
    """Raised for ids that are missing *or* owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationFailure(FinanceAnalyzerError):
    status_code = status.HTTP_401_UNAUTHORIZED


class TokenExpiredError(AuthenticationFailure):
    pass


class InvalidTokenSignatureError(AuthenticationFailure):
    pass


class MalformedTokenError(AuthenticationFailure):
    pass


class ImportFailure(FinanceAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
