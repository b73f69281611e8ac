# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Upgrade message policy for forgerelease.

Turns a comparison verdict into the text shown to a user, based on
caller-supplied messages and policy flags.

Example:
    Tell the user whether an upgrade is available:

        from forgerelease.versioning.messages import (
            VersionMessages,
            VersionOptions,
            check_version,
        )

        text = check_version(
            "1.0.0",
            latest.tag_name,
            messages=VersionMessages(upgrade_url="https://example.com/download"),
            options=VersionOptions(show_message_on_current=True),
        )
        if text:
            print(text)

"""

from __future__ import annotations

from dataclasses import dataclass

from forgerelease.exceptions import VersionPolicyViolation

from .compare import compare_versions

DEFAULT_OLDER = "There is a newer release available"
DEFAULT_EQUAL = "You are up to date"
DEFAULT_NEWER = "You are on an unreleased version"


@dataclass(frozen=True)
class VersionMessages:
    older: str = ""
    equal: str = ""
    newer: str = ""
    upgrade_url: str = ""


@dataclass(frozen=True)
class VersionOptions:
    die_if_older: bool = False
    die_if_newer: bool = False
    show_message_on_current: bool = False


def resolve_message(
    verdict: int,
    messages: VersionMessages | None = None,
    options: VersionOptions | None = None,
) -> str:
    """Resolve the message for a comparison verdict.

    Args:
        verdict: Result of compare_versions(own, other): -1, 0 or 1.
        messages: Custom texts and optional upgrade URL. Empty strings fall
            back to the built-in defaults.
        options: Policy flags controlling fail-fast and the "up to date"
            message.

    Returns:
        The message to show. An empty string means "say nothing" (equal
        versions with show_message_on_current disabled).

    Raises:
        VersionPolicyViolation: If die_if_older is set and own is older, or
            die_if_newer is set and own is newer. Carries the resolved
            message.

    """
    messages = messages or VersionMessages()
    options = options or VersionOptions()

    if verdict < 0:
        text = messages.older
        if not text:
            text = DEFAULT_OLDER
            if messages.upgrade_url:
                text = f"{DEFAULT_OLDER} at {messages.upgrade_url}"
        if options.die_if_older:
            raise VersionPolicyViolation(text, verdict)
        return text

    if verdict == 0:
        if not options.show_message_on_current:
            return ""
        return messages.equal or DEFAULT_EQUAL

    text = messages.newer or DEFAULT_NEWER
    if options.die_if_newer:
        raise VersionPolicyViolation(text, verdict)
    return text


def check_version(
    own: str,
    other: str,
    messages: VersionMessages | None = None,
    options: VersionOptions | None = None,
) -> str:
    """Compare own against other and resolve the resulting message."""
    return resolve_message(compare_versions(own, other), messages, options)
