#!/usr/bin/env python3
"""Atlassian CLI: thin commands over the admin, bitbucket and jira clients.

Commands:
    admin       Organization / user API tokens and keys
    bitbucket   Workspaces, repositories and pull requests
    jira        Issue comments
"""

import argparse
import logging
import sys

import requests

from atlassian_api.admin import AdminClient
from atlassian_api.bitbucket import BitbucketClient
from atlassian_api.context import Context
from atlassian_api.errors import AtlassianError
from atlassian_api.jira import JiraClient
from atlassian_api.models import (
    CommentPayloadScheme,
    IssueCommentPageScheme,
    OrgTokenQueryParams,
    PageOptions,
)
from atlassian_api.models.bitbucket import PullRequestsResponse, RepositoryPageScheme
from atlassian_api.output import emit, emit_error, emit_json, set_json_mode

CLIENTS = {
    'admin': AdminClient,
    'bitbucket': BitbucketClient,
    'jira': JiraClient,
}


def setup(product):
    """Return a client for ``product`` configured from .env or environment variables."""
    return CLIENTS[product].from_env()


# ---------------------------------------------------------------------------
# admin
# ---------------------------------------------------------------------------

def _org_query(args):
    return OrgTokenQueryParams(page_size=args.limit or 0, cursor=args.cursor or '')


def cmd_org_tokens(args):
    client = setup('admin')
    page = client.org_token.gets(Context.background(), args.org, _org_query(args))
    tokens = page.data if page else []
    for token in tokens:
        print(f'{token.id} {token.label or ""}'.rstrip())
    emit('DONE', f'{len(tokens)} tokens', data={'tokens': tokens})


def cmd_org_keys(args):
    client = setup('admin')
    page = client.org_key.gets(Context.background(), args.org, _org_query(args))
    keys = page.data if page else []
    for key in keys:
        print(f'{key.id} {key.name or ""}'.rstrip())
    emit('DONE', f'{len(keys)} keys', data={'keys': keys})


def cmd_user_tokens(args):
    client = setup('admin')
    tokens = client.user_token.gets(Context.background(), args.account) or []
    for token in tokens:
        print(f'{token.id} {token.label or ""} (last access: {token.last_access or "never"})')
    emit('DONE', f'{len(tokens)} tokens', data={'tokens': tokens})


# ---------------------------------------------------------------------------
# bitbucket
# ---------------------------------------------------------------------------

def _page_options(args):
    return PageOptions(page=args.page or 0, page_len=args.pagelen or 0, q=getattr(args, 'query', None) or '')


def cmd_workspace(args):
    client = setup('bitbucket')
    workspace = client.workspace.get(Context.background(), args.workspace)
    emit_json(workspace)


def cmd_repos(args):
    client = setup('bitbucket')
    page = client.workspace.repository.list(
        Context.background(), args.workspace, _page_options(args)) or RepositoryPageScheme()
    for repo in page.values:
        print(f'{repo.full_name or repo.slug} [{repo.language or "?"}]')
    emit('DONE', f'{len(page.values)} repositories', data={'next': page.next})


def cmd_prs(args):
    client = setup('bitbucket')
    page = client.workspace.repository.list_pull_requests(
        Context.background(), args.workspace, args.repo, _page_options(args)) or PullRequestsResponse()
    for pr in page.values:
        author = pr.author.display_name if pr.author else '?'
        print(f'#{pr.id} [{pr.state}] {pr.title}  ({author})')
    emit('DONE', f'{len(page.values)} pull requests', data={'next': page.next})


# ---------------------------------------------------------------------------
# jira
# ---------------------------------------------------------------------------

def cmd_comments(args):
    client = setup('jira')
    page = client.issue.comment.gets(
        Context.background(), args.issue, max_results=args.max) or IssueCommentPageScheme()
    for c in page.comments:
        author = c.author.display_name if c.author else '?'
        date = (c.created or '')[:16]
        text = (c.body or '').replace('\n', ' ')[:100]
        print(f'{author} ({date}): {text}')
    emit('DONE', f'{len(page.comments)} comments')


def cmd_comment(args):
    client = setup('jira')
    comment = client.issue.comment.add(Context.background(), args.issue, CommentPayloadScheme(body=args.body))
    comment_id = comment.id if comment else None
    emit('OK', f'Comment {comment_id or "(no id)"} added to {args.issue}', data={'id': comment_id})


def build_parser():
    parser = argparse.ArgumentParser(
        prog='atlassian',
        description='Atlassian CLI for admin, bitbucket and jira',
    )
    parser.add_argument('--json', action='store_true', dest='json_output',
                        help='Output as JSON for programmatic parsing')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging on stderr')

    sub = parser.add_subparsers(dest='product', required=True)

    # -----------------------------------------------------------------------
    # admin subcommand
    # -----------------------------------------------------------------------
    admin_parser = sub.add_parser('admin', help='Organization administration')
    admin_sub = admin_parser.add_subparsers(dest='command', required=True)

    p = admin_sub.add_parser('org-tokens', help='List API tokens of an organization')
    p.add_argument('org', help='Organization ID')
    p.add_argument('--limit', type=int, help='Page size')
    p.add_argument('--cursor', help='Cursor of the page to fetch')
    p.set_defaults(func=cmd_org_tokens)

    p = admin_sub.add_parser('org-keys', help='List API keys of an organization')
    p.add_argument('org', help='Organization ID')
    p.add_argument('--limit', type=int, help='Page size')
    p.add_argument('--cursor', help='Cursor of the page to fetch')
    p.set_defaults(func=cmd_org_keys)

    p = admin_sub.add_parser('user-tokens', help='List API tokens of a managed user')
    p.add_argument('account', help='Account ID')
    p.set_defaults(func=cmd_user_tokens)

    # -----------------------------------------------------------------------
    # bitbucket subcommand
    # -----------------------------------------------------------------------
    bb_parser = sub.add_parser('bitbucket', help='Bitbucket Cloud')
    bb_sub = bb_parser.add_subparsers(dest='command', required=True)

    p = bb_sub.add_parser('workspace', help='Show a workspace')
    p.add_argument('workspace', help='Workspace slug or UUID')
    p.set_defaults(func=cmd_workspace)

    p = bb_sub.add_parser('repos', help='List repositories in a workspace')
    p.add_argument('workspace', help='Workspace slug or UUID')
    p.add_argument('--query', help='Bitbucket filter query (q=...)')
    p.add_argument('--page', type=int, help='Page number')
    p.add_argument('--pagelen', type=int, help='Results per page')
    p.set_defaults(func=cmd_repos)

    p = bb_sub.add_parser('prs', help='List pull requests in every state')
    p.add_argument('workspace', help='Workspace slug or UUID')
    p.add_argument('repo', help='Repository slug')
    p.add_argument('--query', help='Bitbucket filter query (q=...)')
    p.add_argument('--page', type=int, help='Page number')
    p.add_argument('--pagelen', type=int, help='Results per page')
    p.set_defaults(func=cmd_prs)

    # -----------------------------------------------------------------------
    # jira subcommand
    # -----------------------------------------------------------------------
    jira_parser = sub.add_parser('jira', help='Jira Cloud')
    jira_sub = jira_parser.add_subparsers(dest='command', required=True)

    p = jira_sub.add_parser('comments', help='List comments of an issue')
    p.add_argument('issue', help='Issue key or ID (e.g. PROJ-123)')
    p.add_argument('--max', type=int, default=50, help='Max results (default: 50)')
    p.set_defaults(func=cmd_comments)

    p = jira_sub.add_parser('comment', help='Add a comment')
    p.add_argument('issue', help='Issue key or ID')
    p.add_argument('body', help='Comment text')
    p.set_defaults(func=cmd_comment)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s',
        stream=sys.stderr,
    )
    if args.json_output:
        set_json_mode(True)
    try:
        args.func(args)
    except AtlassianError as e:
        emit_error(e)
        sys.exit(1)
    except requests.RequestException as e:
        emit_error(f'Request failed: {e}')
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == '__main__':
    main()
