"""Print the head commit of a GitHub branch as JSON."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

from branchhead.branch_head import run_query
from branchhead.errors import BranchHeadError
from branchhead.runtime import initialize

_EXIT_FAILURE = 1
_EXIT_USAGE = 2


def main(argv: list[str] | None = None) -> int:
    """Look up a branch head and print the normalized result.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the lookup fails, 2 without a token.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("owner", help="Repository owner login")
    parser.add_argument("repo", help="Repository name")
    parser.add_argument("branch", help="Branch name")
    parser.add_argument(
        "--token",
        default=None,
        help="GitHub token (defaults to the GITHUB_TOKEN environment variable)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (defaults to BRANCHHEAD_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    token = args.token or os.environ.get("GITHUB_TOKEN", "").strip()
    if not token:
        print(
            "error: a token is required via --token or GITHUB_TOKEN",
            file=sys.stderr,
        )
        return _EXIT_USAGE

    initialize(args.log_level)
    try:
        result = asyncio.run(run_query(args.owner, args.repo, args.branch, token))
    except BranchHeadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return _EXIT_FAILURE

    print(result.to_json().decode("utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
