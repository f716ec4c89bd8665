"""Permission strings known to the helpdesk.

Permissions follow the ``resource::action`` convention and are compared
by exact value. There is no wildcard or hierarchy: ``role::update``
does not imply ``role::read``. Anything that accepts a permission also
accepts a plain ``str``, so plugins may introduce their own strings
without touching this enumeration.
"""

from collections.abc import Iterable
from enum import StrEnum


class Permission(StrEnum):
    """Built-in permission strings."""

    # Tickets
    ISSUE_CREATE = "issue::create"
    ISSUE_READ = "issue::read"
    ISSUE_UPDATE = "issue::update"
    ISSUE_DELETE = "issue::delete"
    ISSUE_ASSIGN = "issue::assign"
    ISSUE_TRANSFER = "issue::transfer"
    ISSUE_COMMENT = "issue::comment"

    # Users
    USER_CREATE = "user::create"
    USER_READ = "user::read"
    USER_UPDATE = "user::update"
    USER_DELETE = "user::delete"

    # Roles
    ROLE_CREATE = "role::create"
    ROLE_READ = "role::read"
    ROLE_UPDATE = "role::update"
    ROLE_DELETE = "role::delete"

    # Clients
    CLIENT_CREATE = "client::create"
    CLIENT_READ = "client::read"
    CLIENT_UPDATE = "client::update"
    CLIENT_DELETE = "client::delete"

    # Knowledge base
    KB_CREATE = "kb::create"
    KB_READ = "kb::read"
    KB_UPDATE = "kb::update"
    KB_DELETE = "kb::delete"

    # Webhooks
    WEBHOOK_CREATE = "webhook::create"
    WEBHOOK_READ = "webhook::read"
    WEBHOOK_UPDATE = "webhook::update"
    WEBHOOK_DELETE = "webhook::delete"

    # Time tracking
    TIME_ENTRY_CREATE = "time_entry::create"
    TIME_ENTRY_READ = "time_entry::read"
    TIME_ENTRY_UPDATE = "time_entry::update"
    TIME_ENTRY_DELETE = "time_entry::delete"


def normalize_permissions(permissions: Iterable[str]) -> list[str]:
    """Collapse duplicates and return a stable, sorted list.

    Enum members are stored by value; unknown strings are kept as-is.
    """
    return sorted({str(permission) for permission in permissions})
