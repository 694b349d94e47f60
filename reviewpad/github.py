"""Access to the GitHub REST and GraphQL APIs, with pagination helpers."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx

MAX_PER_PAGE = 100
DEFAULT_API_URL = "https://api.github.com"

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass
class Response:
    """A decoded API response with its pagination details."""

    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    next_page: int = 0
    status_code: int = 200


class GitHubError(Exception):
    """Raised when the API answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _parse_link_header(link: str) -> Iterator[tuple[str, set[str]]]:
    for part in link.split(","):
        pieces = part.split(";")
        url = pieces[0].strip().strip("<>")
        rels: set[str] = set()
        for param in pieces[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "rel":
                rels.update(value.strip().strip('"').lower().split())
        yield url, rels


def _page_param(url: str) -> str:
    try:
        query = urlsplit(url).query
    except ValueError:
        return ""
    values = parse_qs(query).get("page")
    return values[0] if values else ""


def _parse_int32(text: str) -> int | None:
    if not _DECIMAL.fullmatch(text):
        return None
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def _page_for_rel(link: str, rel: str) -> int:
    for url, rels in _parse_link_header(link):
        if rel in rels:
            return _parse_int32(_page_param(url)) or 0
    return 0


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, Mapping) and "message" in body:
        return str(body["message"])
    return response.text


class GitHubClient:
    """A small synchronous client for the GitHub APIs."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_API_URL,
        graphql_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.base_url = base_url.rstrip("/")
        self.graphql_url = graphql_url or f"{self.base_url}/graphql"
        self._http = httpx.Client(
            base_url=self.base_url, headers=headers, transport=transport, timeout=timeout
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Response:
        """Send a GET request and decode its JSON body."""
        response = self._http.get(path, params=dict(params or {}))
        if response.status_code >= 400:
            raise GitHubError(_error_message(response), response.status_code)
        link = response.headers.get("Link", "")
        return Response(
            data=response.json() if response.content else None,
            headers=response.headers,
            next_page=_page_for_rel(link, "next") if link.strip() else 0,
            status_code=response.status_code,
        )

    def graphql(self, query: str, variables: Mapping[str, Any] | None = None) -> Any:
        """Run a GraphQL query and return its ``data`` member."""
        response = self._http.post(
            self.graphql_url, json={"query": query, "variables": dict(variables or {})}
        )
        if response.status_code >= 400:
            raise GitHubError(_error_message(response), response.status_code)
        body = response.json()
        errors = body.get("errors")
        if errors:
            raise GitHubError(str(errors[0].get("message", errors[0])), response.status_code)
        return body.get("data")

    def close(self) -> None:
        """Release the underlying connections."""
        self._http.close()


def get_pull_request_owner_name(pull_request: Mapping[str, Any]) -> str:
    """Login of the owner of the pull request's base repository."""
    owner = ((pull_request.get("base") or {}).get("repo") or {}).get("owner") or {}
    return owner.get("login") or ""


def get_pull_request_repo_name(pull_request: Mapping[str, Any]) -> str:
    """Name of the pull request's base repository."""
    repo = (pull_request.get("base") or {}).get("repo") or {}
    return repo.get("name") or ""


def get_pull_request_number(pull_request: Mapping[str, Any]) -> int:
    """Number of the pull request."""
    return pull_request.get("number") or 0


def paginated_request(
    init_fn: Callable[[], Any],
    req_fn: Callable[[Any, int], tuple[Any, Response | None]],
) -> Any:
    """Fetch every page, threading the accumulated results through ``req_fn``."""
    page = 1
    results, resp = req_fn(init_fn(), page)
    num_pages = parse_num_pages(resp) if resp is not None else 0
    page += 1
    while page <= num_pages and resp is not None and resp.next_page >= page:
        results, resp = req_fn(results, page)
        page += 1
    return results


def parse_num_pages_from_link(link: str) -> int:
    """Total number of pages named by the ``last`` relation of a Link header."""
    return _page_for_rel(link, "last")


def parse_num_pages(resp: Response) -> int:
    """Total number of pages given by a response's Link header, or 0."""
    link = httpx.Headers(resp.headers).get("Link", "")
    if link.strip(" ") == "":
        return 0
    return parse_num_pages_from_link(link)


def _list_all(client: GitHubClient, path: str, params: Mapping[str, Any] | None = None) -> list[Any]:
    def request(acc: list[Any], page: int) -> tuple[list[Any], Response]:
        resp = client.get(path, {**(params or {}), "page": page, "per_page": MAX_PER_PAGE})
        return acc + list(resp.data or []), resp

    return paginated_request(list, request)


def get_pull_request_comments(
    client: GitHubClient, owner: str, repo: str, number: int, opts: Mapping[str, Any] | None
) -> list[dict[str, Any]]:
    """All comments of a pull request; ``opts`` may hold sort, direction and since."""
    params: dict[str, Any] = {}
    for key in ("sort", "direction", "since"):
        value = (opts or {}).get(key)
        if value is not None:
            params[key] = value.isoformat() if isinstance(value, datetime) else value
    return _list_all(client, f"/repos/{owner}/{repo}/issues/{number}/comments", params)


def get_pull_request_files(client: GitHubClient, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
    """All files changed by a pull request."""
    return _list_all(client, f"/repos/{owner}/{repo}/pulls/{number}/files")


def get_pull_request_reviewers(
    client: GitHubClient, owner: str, repo: str, number: int, opts: Any
) -> dict[str, list[Any]]:
    """Requested reviewers of a pull request, as ``{"users": [...], "teams": [...]}``."""
    path = f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers"

    def request(acc: dict[str, list[Any]], page: int) -> tuple[dict[str, list[Any]], Response]:
        resp = client.get(path, {"page": page, "per_page": MAX_PER_PAGE})
        data = resp.data or {}
        return {
            "users": acc["users"] + list(data.get("users") or []),
            "teams": acc["teams"] + list(data.get("teams") or []),
        }, resp

    return paginated_request(lambda: {"users": [], "teams": []}, request)


def get_repo_collaborators(client: GitHubClient, owner: str, repo: str) -> list[dict[str, Any]]:
    """All collaborators of a repository."""
    return _list_all(client, f"/repos/{owner}/{repo}/collaborators")


def get_issues_available_assignees(client: GitHubClient, owner: str, repo: str) -> list[dict[str, Any]]:
    """All users that issues of a repository can be assigned to."""
    return _list_all(client, f"/repos/{owner}/{repo}/assignees")


def get_pull_request_commits(client: GitHubClient, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
    """All commits of a pull request."""
    return _list_all(client, f"/repos/{owner}/{repo}/pulls/{number}/commits")