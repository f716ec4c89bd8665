"""Roles module: role definitions and role membership."""

from fastapi import APIRouter


router = APIRouter(prefix="/roles", tags=["roles"])

# Import routes to register them (must be after router is defined)
from helpdesk.modules.roles import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "roles",
    "version": "1.0.0",
    "description": "Role-based access control administration",
    "dependencies": ["users"],
}
