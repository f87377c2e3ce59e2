"""The branch head query and the raw response shape GitHub returns for it.

Every field below mirrors the GraphQL selection set. Optional members are
optional because GraphQL may null them out on partial failure; the mapping in
:mod:`branchhead.branch_head.service` decides which absences are fatal.
"""

from __future__ import annotations

import msgspec

from branchhead.graphql import GraphQLQuery

BRANCH_HEAD_DOCUMENT = """
query BranchHeadCommitAuthor($owner: String!, $repoName: String!, $branch: String!) {
  repository(owner: $owner, name: $repoName) {
    nameWithOwner
    owner {
      __typename
      login
      avatarUrl
      ... on User {
        name
        email
      }
      ... on Organization {
        name
        email
      }
    }
    ref(qualifiedName: $branch) {
      name
      target {
        __typename
        oid
        ... on Commit {
          message
          author {
            ...GitActorFields
          }
          committer {
            ...GitActorFields
          }
        }
      }
    }
  }
  rateLimit {
    cost
    limit
    nodeCount
    remaining
    used
    resetAt
  }
}

fragment GitActorFields on GitActor {
  avatarUrl
  name
  email
  user {
    login
  }
}
"""


class BranchHeadVariables(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Variables for the branch head query; ``repo_name`` is sent as ``repoName``."""

    owner: str
    repo_name: str
    branch: str


class RawRateLimit(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """``rateLimit`` block describing quota use of the authenticating token."""

    cost: int
    limit: int
    node_count: int
    remaining: int
    used: int
    reset_at: str


class RawOwner(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Repository owner; ``typename`` is ``User`` or ``Organization`` today.

    Users always expose ``email``; organizations may not.
    """

    typename: str = msgspec.field(name="__typename")
    login: str
    avatar_url: str
    name: str | None = None
    email: str | None = None


class RawLinkedUser(msgspec.Struct, frozen=True):
    """Platform account linked to a git signature by email."""

    login: str


class RawGitActor(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A raw git signature; ``user`` is set only for known account emails."""

    avatar_url: str
    name: str | None = None
    email: str | None = None
    user: RawLinkedUser | None = None


class RawTarget(msgspec.Struct, kw_only=True, frozen=True):
    """Git object at the tip of a ref.

    Only ``Commit`` targets carry ``message`` and the signatures. Tags, trees,
    blobs and any object type GitHub adds later share just ``oid``.
    """

    typename: str = msgspec.field(name="__typename")
    oid: str
    message: str | None = None
    author: RawGitActor | None = None
    committer: RawGitActor | None = None


class RawRef(msgspec.Struct, kw_only=True, frozen=True):
    """Git ref resolved from the requested branch name."""

    name: str
    target: RawTarget | None = None


class RawRepository(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Repository metadata and the requested ref."""

    name_with_owner: str
    owner: RawOwner
    ref: RawRef | None = None


class BranchHeadResponseData(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """The ``data`` member of a branch head response."""

    rate_limit: RawRateLimit | None = None
    repository: RawRepository | None = None


BRANCH_HEAD_QUERY: GraphQLQuery[BranchHeadVariables, BranchHeadResponseData] = (
    GraphQLQuery(
        document=BRANCH_HEAD_DOCUMENT,
        operation_name="BranchHeadCommitAuthor",
        response_type=BranchHeadResponseData,
    )
)
