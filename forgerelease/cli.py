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

"""Command-line interface for forgerelease.

This module provides the main CLI entry point for the forgerelease tool,
offering commands to query releases and repositories on Gitea, GitHub and
GitLab, compare versions, and download release assets.

Commands:

    releases: List the releases of a repository (or only the latest)
    repos: List a user's repositories
    compare: Compare two versions and print the upgrade message
    download: Download a file to a chosen name

Example:
    Latest release from Codeberg (Gitea/Forgejo):
        ```bash
        $ forgerelease releases --base-url https://codeberg.org \\
            --user forgejo --repo forgejo --latest
        ```

    GitHub repositories that have releases:
        ```bash
        $ forgerelease repos --base-url github.com --user golang --with-releases
        ```

    Fail a build script when the bundled version is outdated:
        ```bash
        $ forgerelease compare 1.2.0 v1.3.0 --die-if-older
        ```

    Use a config file for source, headers and messages:
        ```bash
        $ forgerelease releases --config forgerelease.yaml --latest
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, network, or parse failure)
- 125: Version policy violation (--die-if-older / --die-if-newer)

Note:
    Each command has its own handler function (cmd_<command>).
    Command-line flags override values from --config.
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and shows the effective configuration.

"""

from __future__ import annotations

import argparse
from dataclasses import asdict
from importlib.metadata import version
import json
import sys
from typing import Any

from forgerelease.config import (
    load_config,
    messages_from_config,
    options_from_config,
    transport_from_config,
)
from forgerelease.core import (
    ReleaseQuery,
    RepositoryQuery,
    get_releases,
    get_repositories,
)
from forgerelease.exceptions import (
    ConfigError,
    ForgeReleaseError,
    VersionPolicyViolation,
)
from forgerelease.io import HttpTransport, download_binary
from forgerelease.logging import get_logger, set_global_logger
from forgerelease.models import Release, Repository
from forgerelease.versioning import (
    VersionMessages,
    VersionOptions,
    compare_versions,
    resolve_message,
)

VERDICT_LABELS = {-1: "older", 0: "equal", 1: "newer"}


def _setup(args: argparse.Namespace) -> tuple[dict[str, Any], HttpTransport]:
    """Install the logger, load config and build the transport."""
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    cfg = load_config(args.config)
    transport = transport_from_config(cfg)
    if args.timeout is not None:
        transport.set_timeout(args.timeout)
    return cfg, transport


def _report_error(args: argparse.Namespace, err: Exception) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def _source_value(args: argparse.Namespace, cfg: dict[str, Any], key: str) -> str:
    value = getattr(args, key, None)
    if value:
        return value
    return cfg.get("source", {}).get(key) or ""


def _require(values: dict[str, str]) -> None:
    missing = [name for name, value in values.items() if not value]
    if missing:
        flags = ", ".join(f"--{name.replace('_', '-')}" for name in missing)
        raise ConfigError(f"missing required value(s): {flags} (or source.* in config)")


def _print_release(release: Release) -> None:
    print(f"Tag:             {release.tag_name}")
    print(f"Name:            {release.name}")
    print(f"Published:       {release.published_at}")
    print(f"Author:          {release.author.login}")
    if release.draft:
        print("Draft:           yes")
    if release.prerelease:
        print("Prerelease:      yes")
    print(f"URL:             {release.html_url}")
    if release.tarball_url:
        print(f"Tarball:         {release.tarball_url}")
    if release.zipball_url:
        print(f"Zipball:         {release.zipball_url}")
    for asset in release.assets:
        print(f"  [ASSET] {asset.name} -> {asset.browser_download_url}")


def _print_repository(repo: Repository) -> None:
    visibility = "private" if repo.private else "public"
    print(f"{repo.full_name or repo.name}")
    print(f"  Visibility:    {visibility}{', archived' if repo.archived else ''}")
    print(f"  Releases:      {repo.release_counter}")
    print(f"  Stars:         {repo.stars_count}")
    print(f"  URL:           {repo.html_url}")


def cmd_releases(args: argparse.Namespace) -> int:
    """Handler for 'forgerelease releases' command.

    Fetches the releases of one repository and prints them, newest first as
    returned by the forge.

    Args:
        args: Parsed command-line arguments containing the source options,
            latest/json flags and global options.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        cfg, transport = _setup(args)
        query = ReleaseQuery(
            base_url=_source_value(args, cfg, "base_url"),
            user=_source_value(args, cfg, "user"),
            repo=_source_value(args, cfg, "repo"),
            latest=args.latest,
            provider=_source_value(args, cfg, "provider") or None,
        )
        _require({"base_url": query.base_url, "user": query.user, "repo": query.repo})
        releases = get_releases(query, transport)
    except ForgeReleaseError as err:
        return _report_error(args, err)

    if args.json:
        print(json.dumps([asdict(r) for r in releases], indent=2))
        return 0

    print("=" * 70)
    print(f"RELEASES: {query.user}/{query.repo}")
    print("=" * 70)
    if not releases:
        print("No releases found.")
    for index, release in enumerate(releases):
        if index:
            print("-" * 70)
        _print_release(release)
    print("=" * 70)
    return 0


def cmd_repos(args: argparse.Namespace) -> int:
    """Handler for 'forgerelease repos' command.

    Lists a user's repositories, optionally only those with releases.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        cfg, transport = _setup(args)
        query = RepositoryQuery(
            base_url=_source_value(args, cfg, "base_url"),
            user=_source_value(args, cfg, "user"),
            with_releases=args.with_releases,
            provider=_source_value(args, cfg, "provider") or None,
        )
        _require({"base_url": query.base_url, "user": query.user})
        repos = get_repositories(query, transport)
    except ForgeReleaseError as err:
        return _report_error(args, err)

    if args.json:
        print(json.dumps([asdict(r) for r in repos], indent=2))
        return 0

    print("=" * 70)
    print(f"REPOSITORIES: {query.user} ({len(repos)})")
    print("=" * 70)
    for repo in repos:
        _print_repository(repo)
    print("=" * 70)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'forgerelease compare' command.

    Compares OWN against OTHER and prints the resolved message. Messages
    and policy flags come from --config and are overridden by flags.

    Returns:
        Exit code (0 normally, 125 when a die-if policy is triggered, 1 on
        configuration errors).

    """
    try:
        cfg, _ = _setup(args)
    except ConfigError as err:
        return _report_error(args, err)

    base_messages = messages_from_config(cfg)
    messages = VersionMessages(
        older=args.older if args.older is not None else base_messages.older,
        equal=args.equal if args.equal is not None else base_messages.equal,
        newer=args.newer if args.newer is not None else base_messages.newer,
        upgrade_url=args.upgrade_url or base_messages.upgrade_url,
    )
    base_options = options_from_config(cfg)
    options = VersionOptions(
        die_if_older=args.die_if_older or base_options.die_if_older,
        die_if_newer=args.die_if_newer or base_options.die_if_newer,
        show_message_on_current=args.show_current
        or base_options.show_message_on_current,
    )

    verdict = compare_versions(args.own, args.other)

    try:
        message = resolve_message(verdict, messages, options)
    except VersionPolicyViolation as err:
        print(err.message)
        return err.exit_code

    if args.verbose or args.debug:
        print(f"Result: {args.own} vs {args.other} -> {VERDICT_LABELS[verdict]}")
    if message:
        print(message)
    return 0


def cmd_download(args: argparse.Namespace) -> int:
    """Handler for 'forgerelease download' command.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        _, transport = _setup(args)
        path = download_binary(
            args.url, args.output_dir, args.filename, transport=transport
        )
    except (ForgeReleaseError, OSError) as err:
        return _report_error(args, err)

    print(f"[SUCCESS] Downloaded: {path}")
    return 0


def _common_options() -> argparse.ArgumentParser:
    """Options accepted by every command."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="YAML config file (source, http headers, version messages)",
    )
    common.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: from config or 15)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    common.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    return common


def _source_options(parser: argparse.ArgumentParser, with_repo: bool) -> None:
    parser.add_argument(
        "--base-url",
        default=None,
        help="Forge URL, e.g. https://codeberg.org, github.com, https://gitlab.com",
    )
    parser.add_argument("--user", default=None, help="Repository owner")
    if with_repo:
        parser.add_argument("--repo", default=None, help="Repository name")
    parser.add_argument(
        "--provider",
        default=None,
        choices=["gitea", "github", "gitlab"],
        help="Forge type (default: detected from --base-url)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the forgerelease CLI."""
    parser = argparse.ArgumentParser(
        prog="forgerelease",
        description="forgerelease - release and repository lookups for Gitea, GitHub and GitLab",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"forgerelease {version('forgerelease')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )
    common = _common_options()

    # 'releases' command
    parser_releases = subparsers.add_parser(
        "releases",
        parents=[common],
        help="List releases of a repository",
        description="Fetch releases from the forge and print them in canonical form.",
    )
    _source_options(parser_releases, with_repo=True)
    parser_releases.add_argument(
        "--latest",
        action="store_true",
        help="Only the latest release",
    )
    parser_releases.set_defaults(func=cmd_releases)

    # 'repos' command
    parser_repos = subparsers.add_parser(
        "repos",
        parents=[common],
        help="List a user's repositories",
        description="Fetch a user's repositories from the forge.",
    )
    _source_options(parser_repos, with_repo=False)
    parser_repos.add_argument(
        "--with-releases",
        action="store_true",
        help="Only repositories that have releases (exact on Gitea only)",
    )
    parser_repos.set_defaults(func=cmd_repos)

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        parents=[common],
        help="Compare two versions and print the upgrade message",
        description="Compare OWN against OTHER (e.g. the latest release tag).",
    )
    parser_compare.add_argument("own", help="Your version, e.g. 1.2.0")
    parser_compare.add_argument("other", help="Version to compare against, e.g. v1.3.0")
    parser_compare.add_argument("--older", default=None, help="Message when OWN is older")
    parser_compare.add_argument("--equal", default=None, help="Message when versions match")
    parser_compare.add_argument("--newer", default=None, help="Message when OWN is newer")
    parser_compare.add_argument(
        "--upgrade-url",
        default=None,
        help="Appended to the default 'older' message",
    )
    parser_compare.add_argument(
        "--die-if-older",
        action="store_true",
        help="Exit with status 125 when OWN is older",
    )
    parser_compare.add_argument(
        "--die-if-newer",
        action="store_true",
        help="Exit with status 125 when OWN is newer",
    )
    parser_compare.add_argument(
        "--show-current",
        action="store_true",
        help="Print a message when the versions are equal",
    )
    parser_compare.set_defaults(func=cmd_compare)

    # 'download' command
    parser_download = subparsers.add_parser(
        "download",
        parents=[common],
        help="Download a file (e.g. a release asset)",
        description="Download URL to OUTPUT_DIR/FILENAME with an atomic rename.",
    )
    parser_download.add_argument("url", help="URL to download")
    parser_download.add_argument(
        "--output-dir",
        default=".",
        help="Directory to save into (default: current directory)",
    )
    parser_download.add_argument(
        "--filename",
        required=True,
        help="File name to save as",
    )
    parser_download.set_defaults(func=cmd_download)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the forgerelease CLI.

    This function is registered as the 'forgerelease' console script in
    pyproject.toml.
    """
    parser = build_parser()

    # Parse and dispatch
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
