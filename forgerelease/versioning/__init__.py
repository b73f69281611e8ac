"""
Version comparison and upgrade messaging for forgerelease.

This package compares version strings (typically a running application's
version against a release tag) and turns the verdict into a message for
the user, with optional fail-fast policies.

Modules
-------
compare : module
    Prefix stripping and component-wise numeric+suffix comparison.
messages : module
    Policy-driven message resolution for older/equal/newer verdicts.

Public API
----------
compare_versions : function
    Compare two version strings, returning -1, 0, or 1.
strip_version_prefix : function
    Lower-case a version and remove one known prefix ("v", "release", ...).
VersionMessages, VersionOptions : dataclasses
    Caller-supplied texts and policy flags.
resolve_message, check_version : functions
    Produce the user-facing message (or raise VersionPolicyViolation).

Examples
--------
Basic version comparison:

    >>> from forgerelease.versioning import compare_versions
    >>> compare_versions("1.0.0", "1.0.1")
    -1
    >>> compare_versions("v1.2", "1.2")
    0

Suffixes are compared after the number:

    >>> compare_versions("1.0.2rc1", "1.0.2")
    1  # "rc1" > "" in code-point order

Messaging:

    >>> from forgerelease.versioning import VersionMessages, check_version
    >>> check_version("1.0.0", "1.0.1",
    ...               VersionMessages(upgrade_url="https://example.com/upgrade"))
    'There is a newer release available at https://example.com/upgrade'

Notes
-----
- Comparison never fails: components without digits count as 0.
- Only the first matching prefix is removed, so "version1.0" becomes
  "ersion1.0".
"""

from .compare import compare_versions, strip_version_prefix
from .messages import (
    VersionMessages,
    VersionOptions,
    check_version,
    resolve_message,
)

__all__ = [
    "compare_versions",
    "strip_version_prefix",
    "VersionMessages",
    "VersionOptions",
    "check_version",
    "resolve_message",
]
