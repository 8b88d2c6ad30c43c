"""Tests for parse-time options and schema reuse."""

from concurrent.futures import ThreadPoolExecutor

from validon import (
    Ok,
    ParseOptions,
    array,
    current_options,
    number,
    object_,
    parse_context,
    string,
    union,
)


def test_default_options():
    assert current_options() == ParseOptions(union_issues=False)


def test_context_scopes_options():
    with parse_context(union_issues=True):
        assert current_options().union_issues is True
    assert current_options().union_issues is False


def test_context_restored_after_error():
    try:
        with parse_context(union_issues=True):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert current_options().union_issues is False


def test_nested_union_detail():
    v = object_({"id": union([number(), string().uuid()])})
    with parse_context(union_issues=True):
        result = v.parse({"id": "abc"})
    issue = result.error[0]
    assert issue.path == ("id",)
    assert len(issue.detail) == 2


def test_schema_reused_across_threads():
    schema = object_({"name": string().min(1), "scores": array(number().int())})
    inputs = [{"name": f"user{i}", "scores": list(range(i))} for i in range(50)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(schema.parse, inputs))

    assert results == [Ok(value) for value in inputs]
    assert isinstance(schema.parse({"name": "", "scores": []}).error, list)
