# app/core/errors.py
"""
Application error taxonomy.

Every error a client can see is an ``AppError``. Each subclass knows its HTTP
status and machine-readable ``error_code``; app/utiles/response.py renders
any of them into the standard error envelope.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Union


@dataclass
class FieldViolation:
    field: str
    value: Any
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "rejectedValue": self.value, "message": self.message}


class AppError(Exception):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, error: Optional[Union[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.error = error if error is not None else message

    def details(self) -> Optional[list]:
        return None


class ValidationError(AppError):
    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, violations: List[FieldViolation], message: str = "Validation failed"):
        self.violations = list(violations)
        super().__init__(message, [f"{v.field}: {v.message}" for v in self.violations])

    @classmethod
    def single(cls, field: str, value: Any, message: str) -> "ValidationError":
        return cls([FieldViolation(field, value, message)], message=message)

    def details(self) -> list:
        return [v.to_dict() for v in self.violations]


class NotFoundError(AppError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, entity: str, key_name: Optional[str] = None, key: Any = None):
        self.entity = entity
        self.key_name = key_name
        self.key = key
        if key is not None:
            error = f"{entity} with {key_name} {key} not found"
        else:
            error = f"{entity} not found"
        super().__init__(f"{entity} not found", error)


class ConflictError(AppError):
    status_code = 409
    error_code = "CONFLICT"

    def __init__(self, entity: str, field: Optional[str] = None, value: Any = None):
        self.entity = entity
        self.field = field
        self.value = value
        if field:
            error = f"{entity} with {field} '{value}' already exists"
            message = f"Duplicate {field}"
        else:
            error = f"{entity} violates a unique constraint"
            message = "Duplicate key"
        super().__init__(message, error)


class AuthError(AppError):
    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ServerError(AppError):
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)


_LOCATION_PREFIXES = ("body", "query", "path", "header")


def violations_from_pydantic(errors: list) -> List[FieldViolation]:
    """Flatten pydantic / FastAPI error dicts into FieldViolations, keeping their order."""
    violations = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        value = None if err.get("type") == "missing" else err.get("input")
        violations.append(FieldViolation(".".join(loc) or "request", value, message))
    return violations
