"""Bitbucket Cloud payloads (REST API 2.0)."""

from typing import Generic, List, Optional, TypeVar

from pydantic import Field

from atlassian_api.models.common import Scheme

T = TypeVar('T')


class BitbucketPageScheme(Scheme, Generic[T]):
    """Page-based listing envelope used by every Bitbucket collection."""
    size: Optional[int] = None
    page: Optional[int] = None
    pagelen: Optional[int] = None
    next: Optional[str] = None
    previous: Optional[str] = None
    values: List[T] = []


class BitbucketLinkScheme(Scheme):
    href: Optional[str] = None
    name: Optional[str] = None


class BitbucketLinksScheme(Scheme):
    self_: Optional[BitbucketLinkScheme] = Field(None, alias='self')
    html: Optional[BitbucketLinkScheme] = None
    avatar: Optional[BitbucketLinkScheme] = None


class BitbucketAccountScheme(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    account_id: Optional[str] = None
    nickname: Optional[str] = None
    display_name: Optional[str] = None
    links: Optional[BitbucketLinksScheme] = None


class WorkspaceScheme(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    is_private: Optional[bool] = None
    created_on: Optional[str] = None
    updated_on: Optional[str] = None
    links: Optional[BitbucketLinksScheme] = None


class WorkspaceMembershipScheme(Scheme):
    type: Optional[str] = None
    permission: Optional[str] = None
    last_accessed: Optional[str] = None
    added_on: Optional[str] = None
    user: Optional[BitbucketAccountScheme] = None
    workspace: Optional[WorkspaceScheme] = None


class BitbucketGroupScheme(Scheme):
    type: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    full_slug: Optional[str] = None
    owner: Optional[WorkspaceScheme] = None


class BitbucketProjectScheme(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    key: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    is_private: Optional[bool] = None
    created_on: Optional[str] = None
    updated_on: Optional[str] = None
    owner: Optional[BitbucketAccountScheme] = None
    links: Optional[BitbucketLinksScheme] = None


class MainBranchScheme(Scheme):
    name: Optional[str] = None
    type: Optional[str] = None


class RepositoryScheme(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    scm: Optional[str] = None
    is_private: Optional[bool] = None
    fork_policy: Optional[str] = None
    language: Optional[str] = None
    size: Optional[int] = None
    created_on: Optional[str] = None
    updated_on: Optional[str] = None
    mainbranch: Optional[MainBranchScheme] = None
    project: Optional[BitbucketProjectScheme] = None
    workspace: Optional[WorkspaceScheme] = None
    owner: Optional[BitbucketAccountScheme] = None
    links: Optional[BitbucketLinksScheme] = None


class RepositoryPermissionScheme(Scheme):
    type: Optional[str] = None
    permission: Optional[str] = None
    user: Optional[BitbucketAccountScheme] = None
    repository: Optional[RepositoryScheme] = None


class ProjectUserMembershipScheme(Scheme):
    type: Optional[str] = None
    permission: Optional[str] = None
    user: Optional[BitbucketAccountScheme] = None
    project: Optional[BitbucketProjectScheme] = None


class ProjectGroupMembershipScheme(Scheme):
    type: Optional[str] = None
    permission: Optional[str] = None
    group: Optional[BitbucketGroupScheme] = None
    project: Optional[BitbucketProjectScheme] = None


class RepositoryGroupPermissionsScheme(Scheme):
    type: Optional[str] = None
    permission: Optional[str] = None
    group: Optional[BitbucketGroupScheme] = None
    repository: Optional[RepositoryScheme] = None


class BranchRestrictionScheme(Scheme):
    type: Optional[str] = None
    id: Optional[int] = None
    kind: Optional[str] = None
    branch_match_kind: Optional[str] = None
    branch_type: Optional[str] = None
    pattern: Optional[str] = None
    value: Optional[int] = None
    users: List[BitbucketAccountScheme] = []
    groups: List[BitbucketGroupScheme] = []


class CommitScheme(Scheme):
    hash: Optional[str] = None
    type: Optional[str] = None
    message: Optional[str] = None
    date: Optional[str] = None


class PullRequestBranchScheme(Scheme):
    name: Optional[str] = None


class PullRequestRefScheme(Scheme):
    branch: Optional[PullRequestBranchScheme] = None
    commit: Optional[CommitScheme] = None
    repository: Optional[RepositoryScheme] = None


class SummaryScheme(Scheme):
    type: Optional[str] = None
    raw: Optional[str] = None
    markup: Optional[str] = None
    html: Optional[str] = None


class PullRequestScheme(Scheme):
    id: Optional[int] = None
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    reason: Optional[str] = None
    comment_count: Optional[int] = None
    task_count: Optional[int] = None
    close_source_branch: Optional[bool] = None
    created_on: Optional[str] = None
    updated_on: Optional[str] = None
    author: Optional[BitbucketAccountScheme] = None
    closed_by: Optional[BitbucketAccountScheme] = None
    merge_commit: Optional[CommitScheme] = None
    source: Optional[PullRequestRefScheme] = None
    destination: Optional[PullRequestRefScheme] = None
    summary: Optional[SummaryScheme] = None


class DeployKeyScheme(Scheme):
    id: Optional[int] = None
    key: Optional[str] = None
    comment: Optional[str] = None
    label: Optional[str] = None
    type: Optional[str] = None
    created_on: Optional[str] = None
    last_used: Optional[str] = None
    repository: Optional[RepositoryScheme] = None
    owner: Optional[BitbucketAccountScheme] = None


class RepositoryPipelineVariable(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None
    secured: Optional[bool] = None
    system: Optional[bool] = None
    scope: Optional[str] = None


class PipelineStateScheme(Scheme):
    name: Optional[str] = None
    type: Optional[str] = None
    result: Optional[dict] = None


class RepositoryPipelineRun(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    build_number: Optional[int] = None
    created_on: Optional[str] = None
    completed_on: Optional[str] = None
    build_seconds_used: Optional[int] = None
    state: Optional[PipelineStateScheme] = None
    creator: Optional[BitbucketAccountScheme] = None
    target: Optional[dict] = None


class RepositoryPipelineRunStep(Scheme):
    type: Optional[str] = None
    uuid: Optional[str] = None
    name: Optional[str] = None
    started_on: Optional[str] = None
    completed_on: Optional[str] = None
    duration_in_seconds: Optional[int] = None
    state: Optional[PipelineStateScheme] = None


WorkspaceMembershipPageScheme = BitbucketPageScheme[WorkspaceMembershipScheme]
BitbucketProjectPageScheme = BitbucketPageScheme[BitbucketProjectScheme]
RepositoryPageScheme = BitbucketPageScheme[RepositoryScheme]
RepositoryPermissionPageScheme = BitbucketPageScheme[RepositoryPermissionScheme]
ProjectUserMembershipPageScheme = BitbucketPageScheme[ProjectUserMembershipScheme]
ProjectGroupMembershipPageScheme = BitbucketPageScheme[ProjectGroupMembershipScheme]
RepositoryGroupPermissionsPageScheme = BitbucketPageScheme[RepositoryGroupPermissionsScheme]
BranchRestrictionsPageScheme = BitbucketPageScheme[BranchRestrictionScheme]
DefaultReviewersPageScheme = BitbucketPageScheme[BitbucketAccountScheme]
PullRequestsResponse = BitbucketPageScheme[PullRequestScheme]
DeployKeysPageScheme = BitbucketPageScheme[DeployKeyScheme]
RepositoryPipelineVariablesPageScheme = BitbucketPageScheme[RepositoryPipelineVariable]
RepositoryPipelineRunsPageScheme = BitbucketPageScheme[RepositoryPipelineRun]
RepositoryPipelineRunStepsPageScheme = BitbucketPageScheme[RepositoryPipelineRunStep]
