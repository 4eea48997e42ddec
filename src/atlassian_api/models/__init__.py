from atlassian_api.models.admin import (
    OrgKeyPageScheme,
    OrgKeyScheme,
    OrgTokenPageScheme,
    OrgTokenQueryParams,
    OrgTokenScheme,
    UserTokensScheme,
)
from atlassian_api.models.bitbucket import (
    BitbucketAccountScheme,
    BitbucketPageScheme,
    BitbucketProjectScheme,
    RepositoryScheme,
    WorkspaceMembershipScheme,
    WorkspaceScheme,
)
from atlassian_api.models.common import PageOptions, Scheme
from atlassian_api.models.jira import (
    CommentPayloadScheme,
    CommentVisibilityScheme,
    IssueCommentPageScheme,
    IssueCommentScheme,
)
