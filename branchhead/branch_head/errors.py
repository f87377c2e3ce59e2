"""Errors raised when a branch head response lacks an expected link."""

from __future__ import annotations

import typing as typ

from branchhead.errors import BranchHeadError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _with_server_messages(message: str, server_messages: cabc.Sequence[str]) -> str:
    if not server_messages:
        return message
    return f"{message}: {'; '.join(server_messages)}"


class BranchHeadLookupError(BranchHeadError):
    """Raised when the response is missing part of the requested path.

    Each constructor names the missing field and, where known, the repository,
    branch, or commit involved so the failure can be diagnosed from the
    message alone. GraphQL errors that arrived next to the data are appended
    to the message, since they usually explain why a link was nulled out.

    Attributes
    ----------
    field
        Response path of the missing or unexpected field.
    server_messages
        Server-reported error messages that accompanied the response.

    """

    def __init__(
        self,
        message: str,
        *,
        field: str,
        server_messages: cabc.Sequence[str] = (),
    ) -> None:
        """Initialise with a message, the offending field path and any server errors."""
        self.field = field
        self.server_messages = tuple(server_messages)
        super().__init__(_with_server_messages(message, self.server_messages))

    @classmethod
    def repository_not_found(
        cls,
        owner: str,
        repo_name: str,
        *,
        server_messages: cabc.Sequence[str] = (),
    ) -> BranchHeadLookupError:
        """Return an error for a repository GitHub could not resolve."""
        return cls(
            f"Repository {owner}/{repo_name} not found",
            field="repository",
            server_messages=server_messages,
        )

    @classmethod
    def branch_not_found(
        cls,
        branch: str,
        name_with_owner: str,
        *,
        server_messages: cabc.Sequence[str] = (),
    ) -> BranchHeadLookupError:
        """Return an error for a branch that does not exist in the repository."""
        return cls(
            f"Branch '{branch}' not found in repository {name_with_owner}",
            field="repository.ref",
            server_messages=server_messages,
        )

    @classmethod
    def no_commit_at_head(
        cls,
        branch: str,
        name_with_owner: str,
        *,
        server_messages: cabc.Sequence[str] = (),
    ) -> BranchHeadLookupError:
        """Return an error for a ref without a target object."""
        return cls(
            f"No commit at head of branch '{branch}' in {name_with_owner}",
            field="repository.ref.target",
            server_messages=server_messages,
        )

    @classmethod
    def not_a_commit(
        cls,
        branch: str,
        name_with_owner: str,
        typename: str,
        *,
        server_messages: cabc.Sequence[str] = (),
    ) -> BranchHeadLookupError:
        """Return an error for a ref whose target is not a commit."""
        return cls(
            f"Ref '{branch}' in {name_with_owner} does not resolve to a commit "
            f"(found {typename})",
            field="repository.ref.target",
            server_messages=server_messages,
        )

    @classmethod
    def missing_message(
        cls, oid: str, *, server_messages: cabc.Sequence[str] = ()
    ) -> BranchHeadLookupError:
        """Return an error for a commit reported without its message."""
        return cls(
            f"No message on commit {oid}",
            field="repository.ref.target.message",
            server_messages=server_messages,
        )

    @classmethod
    def missing_author(
        cls, oid: str, *, server_messages: cabc.Sequence[str] = ()
    ) -> BranchHeadLookupError:
        """Return an error for a commit without an author signature."""
        return cls(
            f"No author on commit {oid}",
            field="repository.ref.target.author",
            server_messages=server_messages,
        )

    @classmethod
    def missing_committer(
        cls, oid: str, *, server_messages: cabc.Sequence[str] = ()
    ) -> BranchHeadLookupError:
        """Return an error for a commit without a committer signature."""
        return cls(
            f"No committer on commit {oid}",
            field="repository.ref.target.committer",
            server_messages=server_messages,
        )

    @classmethod
    def unsupported_owner(
        cls,
        name_with_owner: str,
        typename: str,
        *,
        server_messages: cabc.Sequence[str] = (),
    ) -> BranchHeadLookupError:
        """Return an error for an owner that is neither a user nor an organization."""
        return cls(
            f"Unsupported owner type {typename} for repository {name_with_owner}",
            field="repository.owner",
            server_messages=server_messages,
        )
