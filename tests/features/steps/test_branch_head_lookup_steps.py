"""Step definitions for branch head lookup BDD scenarios."""

from __future__ import annotations

import asyncio
import typing as typ

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from branchhead import BranchHeadError, Data, run_query
from tests.helpers.github_responses import (
    BranchHeadPayloadSpec,
    RecordingTransport,
    commit_target,
    organization_owner,
)

scenarios("../branch_head_lookup.feature")


class LookupContext(typ.TypedDict, total=False):
    """Shared context for branch head lookup scenarios."""

    transport: RecordingTransport
    result: Data
    error: BranchHeadError


@pytest.fixture
def lookup_context() -> LookupContext:
    """Provide fresh context for each scenario."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------


@given(parsers.parse('GitHub knows branch "{branch}" of "{slug}" at commit "{oid}"'))
def given_branch_at_commit(
    lookup_context: LookupContext, branch: str, slug: str, oid: str
) -> None:
    """Serve a complete response for the branch."""
    spec = BranchHeadPayloadSpec(
        name_with_owner=slug, branch=branch, target=commit_target(oid=oid)
    )
    lookup_context["transport"] = RecordingTransport.json(spec.build())


@given(
    parsers.parse('GitHub knows branch "{branch}" of "{slug}" owned by an organization')
)
def given_organization_owner(
    lookup_context: LookupContext, branch: str, slug: str
) -> None:
    """Serve a response whose owner is an organization."""
    owner_login = slug.split("/", 1)[0]
    spec = BranchHeadPayloadSpec(
        name_with_owner=slug,
        branch=branch,
        owner=organization_owner(owner_login, email=None),
    )
    lookup_context["transport"] = RecordingTransport.json(spec.build())


@given(parsers.parse('GitHub has no branch "{branch}" in "{slug}"'))
def given_missing_branch(lookup_context: LookupContext, branch: str, slug: str) -> None:
    """Serve a response with a null ref."""
    spec = BranchHeadPayloadSpec(name_with_owner=slug, branch=branch, include_ref=False)
    lookup_context["transport"] = RecordingTransport.json(spec.build())


@given(parsers.parse('GitHub rejects the token with "{message}"'))
def given_rejected_token(lookup_context: LookupContext, message: str) -> None:
    """Serve GitHub's out-of-band authentication failure."""
    lookup_context["transport"] = RecordingTransport.json(
        {"message": message, "documentation_url": "https://docs.github.com/graphql"},
        status_code=401,
    )


@given(
    parsers.parse(
        'GitHub knows branch "{branch}" of "{slug}" but reports "{message}"'
    )
)
def given_partial_response(
    lookup_context: LookupContext, branch: str, slug: str, message: str
) -> None:
    """Serve usable data alongside a server error."""
    spec = BranchHeadPayloadSpec(name_with_owner=slug, branch=branch, errors=[message])
    lookup_context["transport"] = RecordingTransport.json(spec.build())


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------


@when(parsers.parse('I look up the head of "{slug}" branch "{branch}"'))
def when_lookup(lookup_context: LookupContext, slug: str, branch: str) -> None:
    """Run the lookup against the canned GitHub response."""
    owner, repo = slug.split("/", 1)
    transport = lookup_context["transport"]

    async def _lookup() -> Data:
        async with transport.client() as client:
            return await run_query(owner, repo, branch, "t0", http_client=client)

    try:
        lookup_context["result"] = asyncio.run(_lookup())
    except BranchHeadError as exc:
        lookup_context["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------


def _result(lookup_context: LookupContext) -> Data:
    assert "error" not in lookup_context, lookup_context.get("error")
    return lookup_context["result"]


@then(parsers.parse('the lookup returns commit "{oid}" with message "{message}"'))
def then_commit(lookup_context: LookupContext, oid: str, message: str) -> None:
    """Assert on the head commit."""
    head = _result(lookup_context).branch.head
    assert head.sha == oid
    assert head.message == message


@then(parsers.parse('the commit author has handle "{handle}"'))
def then_author_handle(lookup_context: LookupContext, handle: str) -> None:
    """Assert on the commit author's login."""
    assert _result(lookup_context).branch.head.author.handle == handle


@then(parsers.parse("the rate limit shows {remaining:d} requests remaining"))
def then_rate_limit(lookup_context: LookupContext, remaining: int) -> None:
    """Assert on the remaining API quota."""
    rate_limit = _result(lookup_context).rate_limit_info
    assert rate_limit is not None
    assert rate_limit.remaining == remaining


@then("the lookup carries no server errors")
def then_no_errors(lookup_context: LookupContext) -> None:
    """Assert that the result has an empty error list."""
    assert _result(lookup_context).errors == ()


@then(parsers.parse('the lookup carries the server error "{message}"'))
def then_server_error(lookup_context: LookupContext, message: str) -> None:
    """Assert that the server error was kept."""
    assert [error.message for error in _result(lookup_context).errors] == [message]


@then(parsers.parse('the repository owner has handle "{handle}" and no email'))
def then_owner(lookup_context: LookupContext, handle: str) -> None:
    """Assert on the repository owner mapping."""
    owner = _result(lookup_context).repo.owner
    assert owner.handle == handle
    assert owner.email is None


@then(parsers.parse('the lookup fails mentioning both "{first}" and "{second}"'))
def then_fails_with_both(
    lookup_context: LookupContext, first: str, second: str
) -> None:
    """Assert that the failure message names both values."""
    message = str(lookup_context["error"])
    assert first in message, message
    assert second in message, message


@then(parsers.parse('the lookup fails mentioning "{text}"'))
def then_fails_with(lookup_context: LookupContext, text: str) -> None:
    """Assert that the failure message names the value."""
    assert text in str(lookup_context["error"])
