"""Unit tests for the permission vocabulary."""

import pytest

from helpdesk.core.permissions.vocabulary import Permission, normalize_permissions


pytestmark = pytest.mark.unit


class TestPermission:
    """Tests for the built-in permission strings."""

    def test_values_follow_resource_action_format(self):
        """Every permission should be ``resource::action``."""
        for permission in Permission:
            resource, action = permission.value.split("::")
            assert resource
            assert action

    def test_compares_equal_to_plain_string(self):
        """Members should be interchangeable with their string values."""
        assert Permission.ROLE_READ == "role::read"
        assert "role::read" in {Permission.ROLE_READ}


class TestNormalizePermissions:
    """Tests for normalize_permissions."""

    def test_removes_duplicates_and_sorts(self):
        result = normalize_permissions(["role::read", "issue::read", "role::read"])

        assert result == ["issue::read", "role::read"]

    def test_enum_members_are_stored_by_value(self):
        result = normalize_permissions([Permission.KB_READ, "kb::read"])

        assert result == ["kb::read"]
        assert type(result[0]) is str

    def test_unknown_strings_are_kept(self):
        """Strings outside the enumeration are valid permissions."""
        assert normalize_permissions(["plugin::sync"]) == ["plugin::sync"]

    def test_empty(self):
        assert normalize_permissions([]) == []
