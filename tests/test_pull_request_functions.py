from datetime import datetime, timezone

import pytest

from reviewpad.builtins import BuiltInError, Env
from reviewpad import pull_request_functions as prf


def default_pull_request(**overrides):
    pr = {
        "number": 6,
        "title": "Amazing new feature",
        "body": "Please pull these awesome changes in!",
        "user": {"login": "john"},
        "comments": 6,
        "commits": 5,
        "additions": 10,
        "deletions": 3,
        "draft": False,
        "assignees": [{"login": "jane"}],
        "labels": [{"name": "bug"}],
        "milestone": {"title": "v1.0"},
        "requested_reviewers": [{"login": "mary"}],
        "requested_teams": [],
        "base": {"ref": "master", "repo": {"owner": {"login": "foobar"}, "name": "default-mock-repo"}},
        "head": {"ref": "new-topic", "repo": {"owner": {"login": "foobar"}, "name": "default-mock-repo"}},
        "created_at": "2009-11-17T20:34:58Z",
    }
    pr.update(overrides)
    return pr


def env_with(**overrides):
    return Env(pull_request=default_pull_request(**overrides))


def test_assignees():
    env = env_with(assignees=[{"login": "jane"}])
    assert prf.assignees(env, []) == ["jane"]


def test_assignees_when_none():
    env = env_with(assignees=None)
    assert prf.assignees(env, []) == []


def test_author():
    env = env_with(user={"login": "john"})
    assert prf.author(env, []) == "john"


def test_base():
    env = env_with(base={"ref": "master", "repo": {"owner": {"login": "john"}, "name": "default-mock-repo"}})
    assert prf.base(env, []) == "master"


def test_comment_count():
    assert prf.comment_count(env_with(), []) == 6


def test_comment_count_missing():
    with pytest.raises(BuiltInError):
        prf.comment_count(env_with(comments=None), [])


def test_commit_count():
    env = env_with(commits=1)
    assert prf.commit_count(env, []) == 1


def test_created_at_from_text_with_nanoseconds():
    env = env_with(created_at="2009-11-17T20:34:58.651387237Z")
    assert prf.created_at(env, []) == 1258490098


def test_created_at_from_datetime():
    date = datetime(2009, 11, 17, 20, 34, 58, 651387, tzinfo=timezone.utc)
    env = env_with(created_at=date)
    assert prf.created_at(env, []) == 1258490098


def test_created_at_with_offset():
    env = env_with(created_at="2009-11-17T21:34:58+01:00")
    assert prf.created_at(env, []) == 1258490098


def test_created_at_missing_is_zero_time():
    env = env_with(created_at=None)
    assert prf.created_at(env, []) == -62135596800


def test_created_at_invalid():
    with pytest.raises(ValueError):
        prf.created_at(env_with(created_at="yesterday"), [])


def test_description():
    env = env_with(body="Please pull these awesome changes in!")
    assert prf.description(env, []) == "Please pull these awesome changes in!"


def test_head():
    env = env_with(head={"ref": "new-topic", "repo": {"owner": {"login": "john"}, "name": "default-mock-repo"}})
    assert prf.head(env, []) == "new-topic"


def test_is_draft_true():
    assert prf.is_draft(env_with(draft=True), []) is True


def test_is_draft_false():
    assert prf.is_draft(env_with(draft=False), []) is False


def test_labels():
    env = env_with(labels=[{"name": "bug"}, {"name": "enhancement"}])
    assert prf.labels(env, []) == ["bug", "enhancement"]


def test_milestone():
    env = env_with(milestone={"title": "v1.0"})
    assert prf.milestone(env, []) == "v1.0"


def test_milestone_absent():
    assert prf.milestone(env_with(milestone=None), []) == ""


def test_reviewers():
    env = env_with(
        user={"login": "john"},
        requested_reviewers=[{"login": "mary"}],
        requested_teams=[{"slug": "reviewpad"}],
    )
    assert prf.reviewers(env, []) == ["mary", "reviewpad"]


def test_size():
    env = env_with(additions=1, deletions=1)
    assert prf.size(env, []) == 2


def test_title():
    env = env_with(title="Amazing new feature")
    assert prf.title(env, []) == "Amazing new feature"


def test_registry_runs_functions():
    env = env_with(title="Registered")
    assert prf.PULL_REQUEST_BUILT_INS["title"](env, []) == "Registered"
    assert prf.PULL_REQUEST_BUILT_INS["commentCount"].returns == "int"