"""Normalized branch head result returned to callers."""

from __future__ import annotations

import typing as typ

import msgspec


class User(msgspec.Struct, kw_only=True, frozen=True):
    """A person or organization associated with the repository or commit.

    Attributes
    ----------
    avatar_url
        Avatar image URL.
    handle
        GitHub login. ``None`` for git signatures whose email is not linked
        to any account.
    name
        Display name as reported by GitHub.
    email
        Email address as reported by GitHub.

    """

    avatar_url: str
    handle: str | None = None
    name: str | None = None
    email: str | None = None


class Commit(msgspec.Struct, kw_only=True, frozen=True):
    """The commit at the head of a branch."""

    author: User
    committer: User
    sha: str
    message: str


class Branch(msgspec.Struct, kw_only=True, frozen=True):
    """A branch and its head commit."""

    name: str
    head: Commit


class Repo(msgspec.Struct, kw_only=True, frozen=True):
    """Repository identity and owner."""

    name_with_owner: str
    owner: User


class RateLimitInfo(msgspec.Struct, kw_only=True, frozen=True):
    """API quota state for the token, copied verbatim from GitHub.

    ``reset_at`` is kept as GitHub's ISO-8601 string.
    """

    cost: int
    limit: int
    node_count: int
    remaining: int
    used: int
    reset_at: str


class GraphQLError(msgspec.Struct, kw_only=True, frozen=True):
    """A server-reported error that accompanied usable data."""

    message: str


class Data(msgspec.Struct, kw_only=True, frozen=True):
    """Normalized result of one branch head lookup.

    Attributes
    ----------
    errors
        Errors GitHub reported alongside the data, in response order.
    rate_limit_info
        Quota state, or ``None`` when GitHub omitted it.
    repo
        Repository identity and owner.
    branch
        The requested branch and its head commit.

    """

    repo: Repo
    branch: Branch
    rate_limit_info: RateLimitInfo | None = None
    errors: tuple[GraphQLError, ...] = ()

    def to_builtins(self) -> dict[str, typ.Any]:
        """Return the result as JSON builtins with snake_case keys.

        Tuples come back as lists, exactly as after a JSON round trip.
        """
        return msgspec.json.decode(self.to_json())

    def to_json(self) -> bytes:
        """Return the result encoded as JSON."""
        return msgspec.json.encode(self)
