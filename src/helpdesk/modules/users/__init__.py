"""Users module: self-service views of identity and permissions."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])

# Import routes to register them (must be after router is defined)
from helpdesk.modules.users import routes  # noqa: F401, E402


# Module metadata
__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "Current user profile and effective permissions",
    "dependencies": [],
}
