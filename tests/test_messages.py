"""
Tests for forgerelease.versioning.messages module.

Tests message resolution including:
- Default texts for older/equal/newer
- Upgrade URL appended to the default "older" message
- Custom messages
- Fail-fast policies raising VersionPolicyViolation
"""

from __future__ import annotations

import pytest

from forgerelease.exceptions import VersionPolicyViolation
from forgerelease.versioning import (
    VersionMessages,
    VersionOptions,
    check_version,
    resolve_message,
)


class TestResolveMessage:
    """Tests for resolve_message()."""

    def test_older_default(self):
        """Test the default message when an upgrade exists."""
        assert resolve_message(-1) == "There is a newer release available"

    def test_older_with_upgrade_url(self):
        """Test that the upgrade URL extends the default message."""
        messages = VersionMessages(upgrade_url="https://example.com/upgrade")

        assert (
            resolve_message(-1, messages)
            == "There is a newer release available at https://example.com/upgrade"
        )

    def test_older_custom_message_ignores_url(self):
        """Test that a custom older message is used verbatim."""
        messages = VersionMessages(
            older="Please update", upgrade_url="https://example.com/upgrade"
        )

        assert resolve_message(-1, messages) == "Please update"

    def test_equal_silent_by_default(self):
        """Test that equal versions produce no message by default."""
        assert resolve_message(0) == ""
        assert resolve_message(0, VersionMessages(equal="Current")) == ""

    def test_equal_shown_when_requested(self):
        """Test the up-to-date message with show_message_on_current."""
        options = VersionOptions(show_message_on_current=True)

        assert resolve_message(0, options=options) == "You are up to date"
        assert resolve_message(0, VersionMessages(equal="Current"), options) == "Current"

    def test_newer_default_and_custom(self):
        """Test messages for an unreleased version."""
        assert resolve_message(1) == "You are on an unreleased version"
        assert resolve_message(1, VersionMessages(newer="Dev build")) == "Dev build"


class TestPolicies:
    """Tests for die_if_older / die_if_newer."""

    def test_die_if_older_raises(self):
        """Test that an older version raises with the resolved message."""
        options = VersionOptions(die_if_older=True)

        with pytest.raises(VersionPolicyViolation) as exc_info:
            resolve_message(-1, VersionMessages(older="Too old"), options)

        assert exc_info.value.message == "Too old"
        assert exc_info.value.verdict == -1
        assert exc_info.value.exit_code == 125

    def test_die_if_newer_raises(self):
        """Test that a newer version raises when die_if_newer is set."""
        with pytest.raises(VersionPolicyViolation) as exc_info:
            resolve_message(1, options=VersionOptions(die_if_newer=True))

        assert str(exc_info.value) == "You are on an unreleased version"

    def test_policies_do_not_fire_on_equal(self):
        """Test that equal versions never trigger a policy."""
        options = VersionOptions(die_if_older=True, die_if_newer=True)

        assert resolve_message(0, options=options) == ""

    def test_die_if_older_does_not_fire_when_newer(self):
        """Test that policies are independent."""
        options = VersionOptions(die_if_older=True)

        assert resolve_message(1, options=options) == "You are on an unreleased version"


class TestCheckVersion:
    """Tests for check_version()."""

    def test_compares_then_resolves(self):
        """Test the composed comparison and message."""
        messages = VersionMessages(upgrade_url="https://example.com/upgrade")

        assert check_version("1.0.0", "v1.0.1", messages) == (
            "There is a newer release available at https://example.com/upgrade"
        )
        assert check_version("v1.0.1", "1.0.1") == ""

    def test_check_version_policy(self):
        """Test that check_version propagates policy violations."""
        with pytest.raises(VersionPolicyViolation):
            check_version("1.0", "2.0", options=VersionOptions(die_if_older=True))
