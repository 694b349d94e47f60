import pytest

from reviewpad.builtins import (
    BUILT_INS,
    BuiltInError,
    BuiltInFunction,
    Env,
    append_string,
    contains,
    filter_values,
    group,
    is_element_of,
    starts_with,
)


@pytest.fixture
def env():
    return Env()


def test_append_string(env):
    assert append_string(env, [["a", "b"], ["c"]]) == ["a", "b", "c"]


def test_append_string_leaves_inputs_untouched(env):
    first = ["a"]
    append_string(env, [first, ["b"]])
    assert first == ["a"]


def test_contains_true(env):
    assert contains(env, ["A title of a pull request", "title of"]) is True


def test_contains_false(env):
    assert contains(env, ["Pull request title", "title of"]) is False


def test_starts_with_true(env):
    assert starts_with(env, ["Title of a pull request", "Title of"]) is True


def test_starts_with_false(env):
    assert starts_with(env, ["Pull request title", "Title"]) is False


def test_is_element_of_true(env):
    assert is_element_of(env, ["elemA", ["elemA", "elemB"]]) is True


def test_is_element_of_false(env):
    assert is_element_of(env, ["elemA", ["elemB", "elemC"]]) is False


def test_filter_values_keeps_order(env):
    result = filter_values(env, [["apple", "berry", "avocado"], lambda s: s.startswith("a")])
    assert result == ["apple", "avocado"]


def test_filter_values_none_match(env):
    assert filter_values(env, [["x", "y"], lambda s: False]) == []


def test_group(env):
    want = ["john", "arthur"]
    env.register_map["techLeads"] = want
    assert group(env, ["techLeads"]) == want


def test_group_when_missing_with_empty_state(env):
    with pytest.raises(BuiltInError) as info:
        group(env, ["techLeads"])
    assert str(info.value) == "getGroup: no group with name techLeads in state map[]"


def test_group_when_missing_lists_state(env):
    env.register_map["devs"] = ["john"]
    with pytest.raises(BuiltInError) as info:
        group(env, ["techLeads"])
    assert str(info.value) == 'getGroup: no group with name techLeads in state map["devs":["john"]]'


def test_built_ins_dispatch_by_name(env):
    assert BUILT_INS["append"](env, [["a"], ["b"]]) == ["a", "b"]
    assert BUILT_INS["isElementOf"](env, ["a", ["a"]]) is True


def test_built_in_function_signature():
    fn = BuiltInFunction(("string",), "bool", lambda e, a: a[0] == "x")
    assert fn(Env(), ["x"]) is True
    assert BUILT_INS["contains"].params == ("string", "string")
    assert BUILT_INS["contains"].returns == "bool"