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

"""Core version comparison utilities for forgerelease.

This module is format-agnostic: it does NOT talk to any server. It only
parses and compares version strings such as release tag names.

A version is a dotted sequence of components. Each component is split into
a leading unsigned integer and a trailing suffix string ("2rc1" -> (2, "rc1"),
"beta" -> (0, "beta")). Components are compared pairwise, number first and
suffix second; when the shared components are all equal, the version with
more components is the newer one.
"""

from __future__ import annotations

import re

# ----------------------------
# Prefix handling
# ----------------------------

# Tested in this order; only the first matching prefix is removed. "v" comes
# first, so "version1.0" loses only its "v".
VERSION_PREFIXES: tuple[str, ...] = ("v", "version", "ver", "release", "rel", "r", "v.")

_LEADING_DIGITS = re.compile(r"[0-9]+")


def strip_version_prefix(version: str) -> str:
    """Lower-case a version string and drop at most one known prefix.

    Args:
        version: Raw version or tag name (e.g., "v1.2.3", "Release2.0").

    Returns:
        The lower-cased string without its first matching prefix.

    Example:
        ```python
        strip_version_prefix("v1.0.0")        # '1.0.0'
        strip_version_prefix("release1.0.0")  # '1.0.0'
        strip_version_prefix("version1.0.0")  # 'ersion1.0.0'
        ```
    """
    version = version.lower()
    for prefix in VERSION_PREFIXES:
        if version.startswith(prefix):
            return version[len(prefix) :]
    return version


# ----------------------------
# Comparison core
# ----------------------------


def split_component(component: str) -> tuple[int, str]:
    """Split one dotted component into (number, suffix).

    A component without leading digits is numeric 0 with the whole text as
    suffix; this never raises.
    """
    m = _LEADING_DIGITS.match(component)
    if not m:
        return 0, component
    return int(m.group(0)), component[m.end() :]


def version_key(version: str) -> tuple[tuple[int, str], ...]:
    """Parse a version string into its component tuple (prefix stripped)."""
    return tuple(split_component(p) for p in strip_version_prefix(version).split("."))


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_versions(own: str, other: str) -> int:
    """Compare two version strings.

    Args:
        own: The version being checked (e.g., the running application).
        other: The reference version (e.g., the latest release tag).

    Returns:
        -1 if own is older than other, 0 if equal, 1 if own is newer.

    Example:
        ```python
        compare_versions("1.0.0", "1.0.1")    # -1
        compare_versions("1.0.1.1", "1.0.1")  # 1
        compare_versions("v2.0", "2.0")       # 0
        ```
    """
    own_parts = version_key(own)
    other_parts = version_key(other)

    result = 0
    for (own_num, own_suffix), (other_num, other_suffix) in zip(own_parts, other_parts):
        result = _cmp(own_num, other_num) or _cmp(own_suffix, other_suffix)
        if result:
            break
    else:
        result = _cmp(len(own_parts), len(other_parts))

    from forgerelease.logging import get_global_logger

    logger = get_global_logger()
    if result < 0:
        logger.verbose("VERSION", f"{own!r} is older than {other!r}")
    elif result > 0:
        logger.verbose("VERSION", f"{own!r} is newer than {other!r}")
    else:
        logger.verbose("VERSION", f"{own!r} is the same as {other!r}")
    return result
