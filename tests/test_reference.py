import pytest

from fast_rules import SR, BadSchemaError, Reference, ref, resolve_params
from fast_rules.utils.path_resolver import get_value_from_path, split_path


def test_ref_only_stores_path():
    reference = SR.ref("auth.password")
    assert isinstance(reference, Reference)
    assert reference.path == ("auth", "password")
    assert str(reference) == "auth.password"


@pytest.mark.parametrize("bad", [None, 12, "", "a..b", "a."])
def test_ref_rejects_malformed_paths(bad):
    with pytest.raises(BadSchemaError):
        ref(bad)


def test_split_path_ignores_root_marker():
    assert split_path("$.a.b") == ("a", "b")


def test_get_value_from_path_walks_mappings_and_lists():
    data = {"company": {"departments": [{"manager": {"name": "Alice"}}]}}
    assert get_value_from_path(data, ("company", "departments", "0", "manager", "name")) == "Alice"
    assert get_value_from_path(data, ("company", "departments", "5", "manager")) is None
    assert get_value_from_path(data, ("company", "missing", "name")) is None
    assert get_value_from_path({"a": 10}, ("a", "missing")) is None
    assert get_value_from_path({1: "int-key"}, ("1",)) == "int-key"


def test_resolve_params_rebuilds_containers():
    root = {"min": 3, "items": ["x", "y"]}
    params = (ref("min"), [ref("items.1"), 5], {"nested": ref("missing")}, "plain")

    resolved = resolve_params(params, root)

    assert resolved == (3, ["y", 5], {"nested": None}, "plain")
    # originals untouched, repeated calls give the same result
    assert isinstance(params[1][0], Reference)
    assert resolve_params(params, root) == resolved


def test_resolve_params_passes_callables_through():
    fn = lambda v: v  # noqa: E731
    assert resolve_params((fn,), {}) == (fn,)
