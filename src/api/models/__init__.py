"""API Pydantic models."""

from .audits import (
    AuditRequest,
    AuditResponse,
    RoleModel,
    RoleMoveRequest,
    RoleReorderRequest,
    RolesResponse,
)
from .responses import ErrorCodes, ErrorResponse, HealthResponse

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "AuditRequest",
    "AuditResponse",
    "RoleModel",
    "RoleMoveRequest",
    "RoleReorderRequest",
    "RolesResponse",
]
