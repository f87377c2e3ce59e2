"""Root of the branchhead exception hierarchy."""

from __future__ import annotations


class BranchHeadError(RuntimeError):
    """Base class for every failure surfaced by a branch head lookup.

    Messages are written to be shown to users directly, so callers can catch
    this one type at their boundary and display ``str(exc)``.
    """
