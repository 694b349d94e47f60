"""Built-in functions that query the GitHub APIs about the pull request."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .builtins import BOOL, STRING, STRING_ARRAY, BuiltInError, BuiltInFunction, Env, Value
from .github import (
    GitHubClient,
    get_pull_request_comments,
    get_pull_request_commits,
    get_pull_request_number,
    get_pull_request_owner_name,
    get_pull_request_repo_name,
)
from .pull_request_functions import INT

LINKED_ISSUES_QUERY = (
    "query($pullRequestNumber:Int!$repositoryName:String!$repositoryOwner:String!)"
    "{repository(owner: $repositoryOwner, name: $repositoryName)"
    "{pullRequest(number: $pullRequestNumber){closingIssuesReferences{totalCount}}}}"
)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _client(env: Env) -> GitHubClient:
    if env.client is None:
        raise BuiltInError("no GitHub client in the environment")
    return env.client


def _coordinates(env: Env) -> tuple[str, str, int]:
    pr = env.pull_request
    return get_pull_request_owner_name(pr), get_pull_request_repo_name(pr), get_pull_request_number(pr)


def _head_owner(env: Env) -> str:
    repo = _mapping(_mapping(env.pull_request.get("head")).get("repo"))
    login = _mapping(repo.get("owner")).get("login")
    if not login:
        raise BuiltInError("pull request head repository has no owner")
    return login


def _logins(users: Any) -> list[str]:
    return [user["login"] for user in users or []]


def comments(env: Env, args: Sequence[Value]) -> list[str]:
    """Bodies of every comment on the pull request."""
    owner, repo, number = _coordinates(env)
    found = get_pull_request_comments(_client(env), owner, repo, number, {})
    return [comment.get("body") or "" for comment in found]


def commits(env: Env, args: Sequence[Value]) -> list[str]:
    """Messages of every commit in the pull request."""
    owner, repo, number = _coordinates(env)
    found = get_pull_request_commits(_client(env), owner, repo, number)
    return [_mapping(commit.get("commit")).get("message") or "" for commit in found]


def has_linear_history(env: Env, args: Sequence[Value]) -> bool:
    """Whether no commit of the pull request is a merge commit."""
    owner, repo, number = _coordinates(env)
    resp = _client(env).get(f"/repos/{owner}/{repo}/pulls/{number}/commits")
    return all(len(commit.get("parents") or []) <= 1 for commit in resp.data or [])


def has_linked_issues(env: Env, args: Sequence[Value]) -> bool:
    """Whether the pull request closes at least one issue."""
    owner, repo, number = _coordinates(env)
    data = _client(env).graphql(
        LINKED_ISSUES_QUERY,
        {"pullRequestNumber": number, "repositoryName": repo, "repositoryOwner": owner},
    )
    pull_request = _mapping(_mapping(_mapping(data).get("repository")).get("pullRequest"))
    total = _mapping(pull_request.get("closingIssuesReferences")).get("totalCount") or 0
    return total > 0


def organization(env: Env, args: Sequence[Value]) -> list[str]:
    """Logins of the members of the organisation owning the head repository."""
    resp = _client(env).get(f"/orgs/{_head_owner(env)}/members")
    return _logins(resp.data)


def team(env: Env, args: Sequence[Value]) -> list[str]:
    """Logins of the members of a team of the head repository's organisation."""
    (slug,) = args
    resp = _client(env).get(f"/orgs/{_head_owner(env)}/teams/{slug}/members")
    return _logins(resp.data)


def total_created_pull_requests(env: Env, args: Sequence[Value]) -> int:
    """Number of pull requests the given user opened in the repository."""
    (dev_name,) = args
    owner, repo, _ = _coordinates(env)
    resp = _client(env).get(f"/repos/{owner}/{repo}/issues", {"creator": dev_name, "state": "all"})
    return sum(1 for issue in resp.data or [] if issue.get("pull_request") is not None)


REMOTE_BUILT_INS: dict[str, BuiltInFunction] = {
    "comments": BuiltInFunction((), STRING_ARRAY, comments),
    "commits": BuiltInFunction((), STRING_ARRAY, commits),
    "hasLinearHistory": BuiltInFunction((), BOOL, has_linear_history),
    "hasLinkedIssues": BuiltInFunction((), BOOL, has_linked_issues),
    "organization": BuiltInFunction((), STRING_ARRAY, organization),
    "team": BuiltInFunction((STRING,), STRING_ARRAY, team),
    "totalCreatedPullRequests": BuiltInFunction((STRING,), INT, total_created_pull_requests),
}