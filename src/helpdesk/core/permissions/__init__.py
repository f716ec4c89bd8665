"""Permission system for role-based access control (RBAC)."""

from helpdesk.core.permissions.checker import (
    AuthorizationDecision,
    Checker,
    PermissionChecker,
)
from helpdesk.core.permissions.config import ActiveConfig, get_authorization_config
from helpdesk.core.permissions.guards import Guard, PermissionGuard
from helpdesk.core.permissions.models import AuthorizationConfig, Role, user_roles
from helpdesk.core.permissions.resolver import MembershipResolver, Resolver
from helpdesk.core.permissions.vocabulary import Permission, normalize_permissions


__all__ = [
    "ActiveConfig",
    "AuthorizationConfig",
    # Checker
    "AuthorizationDecision",
    "Checker",
    # Guards
    "Guard",
    # Resolver
    "MembershipResolver",
    # Vocabulary
    "Permission",
    "PermissionChecker",
    "PermissionGuard",
    "Resolver",
    # Models
    "Role",
    "get_authorization_config",
    "normalize_permissions",
    "user_roles",
]
