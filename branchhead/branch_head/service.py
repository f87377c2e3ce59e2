"""Fetch and normalize the head commit of a GitHub branch."""

from __future__ import annotations

import typing as typ

from branchhead.errors import BranchHeadError
from branchhead.github import GitHubClient, GitHubClientConfig
from branchhead.graphql import require_data

from .errors import BranchHeadLookupError
from .models import Branch, Commit, Data, GraphQLError, RateLimitInfo, Repo, User
from .observability import QueryEventLogger
from .query import (
    BRANCH_HEAD_QUERY,
    BranchHeadResponseData,
    BranchHeadVariables,
    RawGitActor,
    RawOwner,
    RawRateLimit,
    RawRef,
    RawRepository,
    RawTarget,
)

if typ.TYPE_CHECKING:
    import httpx

    from branchhead.graphql import GraphQLResponse


def _rate_limit_info(rate_limit: RawRateLimit | None) -> RateLimitInfo | None:
    if rate_limit is None:
        return None
    return RateLimitInfo(
        cost=rate_limit.cost,
        limit=rate_limit.limit,
        node_count=rate_limit.node_count,
        remaining=rate_limit.remaining,
        used=rate_limit.used,
        reset_at=rate_limit.reset_at,
    )


def _user_from_owner(
    owner: RawOwner, *, name_with_owner: str, server_messages: tuple[str, ...]
) -> User:
    """Map either owner type onto :class:`User`; ``handle`` is the login."""
    match owner.typename:
        case "User" | "Organization":
            return User(
                avatar_url=owner.avatar_url,
                handle=owner.login,
                name=owner.name,
                email=owner.email,
            )
        case typename:
            raise BranchHeadLookupError.unsupported_owner(
                name_with_owner, typename, server_messages=server_messages
            )


def _user_from_actor(actor: RawGitActor) -> User:
    """Map a git signature onto :class:`User`.

    ``handle`` stays ``None`` unless GitHub linked the signature's email to
    an account.
    """
    return User(
        avatar_url=actor.avatar_url,
        handle=actor.user.login if actor.user is not None else None,
        name=actor.name,
        email=actor.email,
    )


def _commit_from_target(
    target: RawTarget,
    *,
    branch: str,
    name_with_owner: str,
    server_messages: tuple[str, ...],
) -> Commit:
    if target.typename != "Commit":
        raise BranchHeadLookupError.not_a_commit(
            branch, name_with_owner, target.typename, server_messages=server_messages
        )
    if target.message is None:
        raise BranchHeadLookupError.missing_message(
            target.oid, server_messages=server_messages
        )
    if target.author is None:
        raise BranchHeadLookupError.missing_author(
            target.oid, server_messages=server_messages
        )
    if target.committer is None:
        raise BranchHeadLookupError.missing_committer(
            target.oid, server_messages=server_messages
        )
    return Commit(
        author=_user_from_actor(target.author),
        committer=_user_from_actor(target.committer),
        sha=target.oid,
        message=target.message,
    )


def _branch_from_ref(
    ref: RawRef, *, name_with_owner: str, server_messages: tuple[str, ...]
) -> Branch:
    if ref.target is None:
        raise BranchHeadLookupError.no_commit_at_head(
            ref.name, name_with_owner, server_messages=server_messages
        )
    return Branch(
        name=ref.name,
        head=_commit_from_target(
            ref.target,
            branch=ref.name,
            name_with_owner=name_with_owner,
            server_messages=server_messages,
        ),
    )


def _repo_from_repository(
    repository: RawRepository, *, server_messages: tuple[str, ...]
) -> Repo:
    return Repo(
        name_with_owner=repository.name_with_owner,
        owner=_user_from_owner(
            repository.owner,
            name_with_owner=repository.name_with_owner,
            server_messages=server_messages,
        ),
    )


def normalize_response(
    response: GraphQLResponse[BranchHeadResponseData],
    variables: BranchHeadVariables,
) -> Data:
    """Turn a raw branch head response into :class:`Data`.

    Errors reported alongside non-null data are carried into ``Data.errors``
    and a missing ``rateLimit`` becomes ``None``. Every link on the path from
    ``repository`` down to the commit signatures is required; when one is
    missing, the server's error messages are attached to the failure.

    Parameters
    ----------
    response
        The decoded GraphQL envelope.
    variables
        The variables the query ran with, used in error messages.

    Returns
    -------
    Data
        The normalized result.

    Raises
    ------
    GraphQLResponseError
        If the envelope carries no data.
    BranchHeadLookupError
        If a required link is missing or has an unexpected type.

    """
    data = require_data(response)
    server_messages = response.error_messages

    repository = data.repository
    if repository is None:
        raise BranchHeadLookupError.repository_not_found(
            variables.owner, variables.repo_name, server_messages=server_messages
        )

    ref = repository.ref
    if ref is None:
        raise BranchHeadLookupError.branch_not_found(
            variables.branch,
            repository.name_with_owner,
            server_messages=server_messages,
        )

    return Data(
        repo=_repo_from_repository(repository, server_messages=server_messages),
        branch=_branch_from_ref(
            ref,
            name_with_owner=repository.name_with_owner,
            server_messages=server_messages,
        ),
        rate_limit_info=_rate_limit_info(data.rate_limit),
        errors=tuple(GraphQLError(message=message) for message in server_messages),
    )


async def run_query(  # noqa: PLR0913
    owner: str,
    repo: str,
    branch: str,
    token: str,
    *,
    config: GitHubClientConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
    event_logger: QueryEventLogger | None = None,
) -> Data:
    """Fetch the head commit of ``owner/repo@branch`` using ``token``.

    Exactly one GraphQL request is issued. Nothing is cached or retried.

    Parameters
    ----------
    owner
        Repository owner login.
    repo
        Repository name.
    branch
        Branch name, resolved by GitHub as a qualified ref name.
    token
        GitHub token sent as a bearer credential.
    config
        Connection settings; read from the environment when omitted.
    http_client
        Optional ``httpx.AsyncClient``; left open when supplied.
    event_logger
        Sink for structured lookup events.

    Returns
    -------
    Data
        The normalized repository, branch, commit, and rate-limit details.

    Raises
    ------
    BranchHeadError
        For every transport, platform, GraphQL, or shape failure.

    """
    events = event_logger or QueryEventLogger()
    repo_slug = f"{owner}/{repo}"
    variables = BranchHeadVariables(owner=owner, repo_name=repo, branch=branch)
    events.log_query_started(repo_slug=repo_slug, branch=branch)

    try:
        async with GitHubClient(
            token,
            config=config or GitHubClientConfig.from_env(),
            http_client=http_client,
        ) as github:
            response = await github.run_query(BRANCH_HEAD_QUERY, variables)
        result = normalize_response(response, variables)
    except BranchHeadError as exc:
        events.log_query_failed(repo_slug=repo_slug, branch=branch, error=exc)
        raise

    events.log_query_completed(repo_slug=repo_slug, result=result)
    return result
