# reviewpad

GitHub pull request helpers and the built-in functions used by code review
policies: small, plain functions that look at a pull request, its changed
files and its repository, and return strings, numbers, booleans or lists.

## Modules

- `reviewpad.github`: `GitHubClient`, a small synchronous client for the
  GitHub REST and GraphQL APIs built on httpx (`get`, `graphql`, `close`;
  it can also be used as a context manager). Errors answered by the API are
  raised as `GitHubError`, which carries the API's `message` and the
  `status_code`. Paginated helpers fetch every page:
  `get_pull_request_files`, `get_pull_request_comments`,
  `get_pull_request_commits`, `get_pull_request_reviewers`,
  `get_repo_collaborators` and `get_issues_available_assignees`.
  Pagination follows the `Link` header (`paginated_request`,
  `parse_num_pages`, `parse_num_pages_from_link`); `Response` holds the
  decoded body, headers and next page. `get_pull_request_owner_name`,
  `get_pull_request_repo_name` and `get_pull_request_number` read a
  decoded pull request.
- `reviewpad.builtins`: the evaluation environment `Env` (with
  `pull_request`, `client`, `patch` and `register_map`), the
  `BuiltInFunction` record and the general built-ins `append_string`,
  `contains`, `starts_with`, `is_element_of`, `filter_values` and `group`.
  `group` raises `BuiltInError` for an unknown name.
- `reviewpad.pull_request_functions`: built-ins that read the pull request
  itself: `author`, `assignees`, `base`, `head`, `title`, `description`,
  `labels`, `milestone`, `reviewers`, `size`, `is_draft`, `comment_count`,
  `commit_count` and `created_at` (seconds since the Unix epoch).
- `reviewpad.patch_functions`: built-ins over the changed files:
  `file_count`, `has_file_name`, `has_file_extensions` and
  `has_file_pattern`. Patterns are globs matched by `match_pattern`, where
  `*` and `?` stay within one path segment, `**` spans directories and
  `[...]` and `{a,b}` are supported; a malformed pattern raises
  `PatternError`.
- `reviewpad.remote_functions`: built-ins that query GitHub through the
  environment's client: `comments`, `commits`, `has_linear_history`,
  `has_linked_issues`, `organization`, `team` and
  `total_created_pull_requests`.
- `reviewpad.fmtio`: `sprintf`, `sprint`, `log_println` and `errorf`
  (which builds a `ContextError`), all prefixing messages with `[context]`.
- `reviewpad.report`: `error`, the text of a user-facing error report.
- `reviewpad.utils`: `element_of`, `file_ext`, `generate_random` and
  `abs_int32`.

Each built-in module also exposes a table from the built-in's name in the
policy language to its `BuiltInFunction`: `BUILT_INS`,
`PULL_REQUEST_BUILT_INS`, `PATCH_BUILT_INS` and `REMOTE_BUILT_INS`.

## Installation

```
pip install reviewpad
```

For the test suite:

```
pip install "reviewpad[test]"
pytest
```

## Examples

Listing the files of a pull request:

```python
from reviewpad.github import GitHubClient, get_pull_request_files

with GitHubClient(token="token") as client:
    for f in get_pull_request_files(client, "octo-org", "octo-repo", 42):
        print(f["filename"])
```

Calling built-ins directly:

```python
from reviewpad.builtins import Env, contains
from reviewpad.patch_functions import has_file_pattern
from reviewpad.pull_request_functions import title

env = Env(
    pull_request={"title": "Add login page"},
    patch={"web/src/login.ts": {}},
)
print(title(env, []))                            # Add login page
print(contains(env, ["Add login page", "login"]))  # True
print(has_file_pattern(env, ["web/**/*.ts"]))    # True
```

Built-in functions take an `Env` and a list of argument values and return
the result value; when one fails, it raises an exception.

## What this package does not do

It does not read, check or run policy files, and it has no interpreter for
the policy language: there is no parser, no type checker, no `rule` or code
pattern built-in, and nothing that applies actions to a pull request. It
has no command-line program. It provides the building blocks listed above
for code that does those things.