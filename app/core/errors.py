from __future__ import annotations

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base for errors that map onto a failure envelope."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class ConfigurationError(AppError):
    status_code = 500
    code = "configuration_error"


class ExternalServiceError(AppError):
    status_code = 502
    code = "external_service_error"

    def __init__(self, message: Optional[str] = None, *, service: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.service = service
        self.status = status


class MalformedResponseError(AppError):
    status_code = 502
    code = "malformed_response"


class AnalysisTimeoutError(AppError):
    status_code = 504
    code = "analysis_timeout"


class AnalysisFailedError(AppError):
    status_code = 502
    code = "analysis_failed"

    def __init__(self, message: Optional[str] = None, *, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class ValidationError(AppError):
    status_code = 400
    code = "validation_failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message or "Validation failed")
        self.errors = errors or []
