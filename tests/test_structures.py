"""
Tests for array, tuple, record and object validators.
"""

import pytest

from validon import (
    UNDEFINED,
    Err,
    IssueCode,
    ObjectSchema,
    Ok,
    ValidationError,
    array,
    boolean,
    format_issues,
    literal,
    number,
    object_,
    record,
    string,
    tuple_,
    unknown,
)


class TestArray:
    def test_valid(self):
        assert array(number()).parse([1, 2, 3]) == Ok([1, 2, 3])

    def test_tuple_input_gives_list(self):
        assert array(number()).parse((1, 2)) == Ok([1, 2])

    def test_output_is_new_list(self):
        data = [1, 2]
        result = array(number()).parse(data)
        assert result.value == data
        assert result.value is not data

    def test_not_array(self):
        for value in ("abc", {"a": 1}, None, 5):
            assert array(string()).parse(value).error[0].code == IssueCode.INVALID_TYPE

    def test_first_element_failure_with_index(self):
        result = array(number()).parse([1, "a", "b"])
        assert isinstance(result, Err)
        assert len(result.error) == 1
        assert result.error[0].path == (1,)

    def test_lengths(self):
        v = array(number()).min(1).max(2)
        assert isinstance(v.parse([1]), Ok)
        assert v.parse([]).error[0].code == IssueCode.TOO_SMALL
        assert v.parse([1, 2, 3]).error[0].code == IssueCode.TOO_BIG
        assert isinstance(array(number()).length(2).parse([1, 2]), Ok)
        assert isinstance(array(number()).length(2).parse([1]), Err)
        assert isinstance(array(number()).nonempty().parse([]), Err)

    def test_elements_transformed(self):
        v = array(number().transform(lambda n: n * 2))
        assert v.parse([1, 2]) == Ok([2, 4])

    def test_nested_objects(self):
        v = array(object_({"id": number()}))
        assert isinstance(v.parse([{"id": 1}, {"id": 2}]), Ok)
        result = v.parse([{"id": 1}, {"id": "2"}])
        assert result.error[0].path == (1, "id")

    def test_optional_elements(self):
        assert array(string().nullable()).parse(["a", None]) == Ok(["a", None])

    def test_array_method(self):
        assert string().array().parse(["a"]) == Ok(["a"])
        assert string().array().element == string()


class TestTuple:
    def test_exact_length(self):
        v = tuple_([string(), number()])
        assert v.parse(["a", 1]) == Ok(("a", 1))
        assert v.parse(["a"]).error[0].code == IssueCode.INVALID_LENGTH
        assert v.parse(["a", 1, 2]).error[0].code == IssueCode.INVALID_LENGTH

    def test_position_failure(self):
        result = tuple_([string(), number()]).parse(["a", "b"])
        assert result.error[0].path == (1,)
        assert result.error[0].code == IssueCode.INVALID_TYPE

    def test_rest(self):
        v = tuple_([string()], rest=number())
        assert v.parse(["a"]) == Ok(("a",))
        assert v.parse(["a", 1, 2]) == Ok(("a", 1, 2))
        assert v.parse(["a", 1, "x"]).error[0].path == (2,)
        assert v.parse([]).error[0].code == IssueCode.INVALID_LENGTH

    def test_rest_method(self):
        v = tuple_([string()]).rest(boolean())
        assert isinstance(v.parse(["a", True, False]), Ok)

    def test_index(self):
        v = tuple_([string(), number()], rest=boolean())
        assert v.index(0) == string()
        assert v.index(1) == number()
        assert v.index(5) == boolean()

    def test_index_without_rest(self):
        with pytest.raises(IndexError):
            tuple_([string()]).index(1)

    def test_empty(self):
        assert tuple_([]).parse([]) == Ok(())
        assert isinstance(tuple_([]).parse([1]), Err)

    def test_not_array(self):
        assert tuple_([string()]).parse("a").error[0].code == IssueCode.INVALID_TYPE


class TestRecord:
    def test_valid(self):
        v = record(number())
        assert v.parse({"a": 1, "b": 2}) == Ok({"a": 1, "b": 2})

    def test_first_failing_key(self):
        result = record(number()).parse({"a": 1, "b": "x", "c": "y"})
        assert len(result.error) == 1
        assert result.error[0].path == ("b",)

    def test_not_mapping(self):
        for value in ([1], None, "abc"):
            assert record(number()).parse(value).error[0].code == IssueCode.INVALID_TYPE

    def test_value_accessor(self):
        assert record(string()).value() == string()

    def test_key_schema(self):
        v = record(number(), keys=string().min(2))
        assert isinstance(v.parse({"ab": 1}), Ok)
        assert v.parse({"a": 1}).error[0].path == ("a",)

    def test_empty(self):
        assert record(number()).parse({}) == Ok({})

    def test_non_string_keys_in_messages(self):
        result = record(record(number())).parse({1.5: {"a": "x"}})
        assert result.error[0].path == (1.5, "a")
        assert "[1.5].a" in format_issues(result.error)
        assert str(result.error[0]).startswith("[1.5].a: ")
        with pytest.raises(ValidationError):
            result.unwrap()


class TestObject:
    def test_valid(self):
        v = object_({"name": string(), "age": number()})
        assert v.parse({"name": "John", "age": 30}) == Ok({"name": "John", "age": 30})

    def test_missing_field(self):
        v = object_({"name": string(), "age": number()})
        result = v.parse({"name": "John"})
        assert isinstance(result, Err)
        assert result.error[0].path == ("age",)
        assert result.error[0].message == "Required"

    def test_reports_all_failures_in_declaration_order(self):
        v = object_({"name": string(), "age": number(), "ok": boolean()})
        result = v.parse({"ok": "no", "name": 1, "age": "x"})
        assert [issue.path for issue in result.error] == [("name",), ("age",), ("ok",)]

    def test_nested_paths(self):
        v = object_({"user": object_({"name": string(), "tags": array(string())})})
        result = v.parse({"user": {"name": 1, "tags": ["a", 2]}})
        assert [issue.path for issue in result.error] == [
            ("user", "name"),
            ("user", "tags", 1),
        ]
        assert "user.tags[1]" in format_issues(result.error)

    def test_unknown_keys_dropped(self):
        v = object_({"a": number()})
        assert v.parse({"a": 1, "b": 2}) == Ok({"a": 1})

    def test_absent_optional_field_omitted(self):
        v = object_({"a": number(), "b": string().optional()})
        assert v.parse({"a": 1}) == Ok({"a": 1})
        assert v.parse({"a": 1, "b": "x"}) == Ok({"a": 1, "b": "x"})

    def test_optional_default_filled_in(self):
        v = object_({"a": number().default(0)})
        assert v.parse({}) == Ok({"a": 0})

    def test_none_is_not_absent(self):
        v = object_({"a": string().optional()})
        assert isinstance(v.parse({"a": None}), Err)

    def test_not_mapping(self):
        v = object_({"a": number()})
        for value in (None, [1], "a", 1):
            assert v.parse(value).error[0].code == IssueCode.INVALID_TYPE

    def test_empty_shape_accepts_any_mapping(self):
        assert object_({}).parse({"x": 1}) == Ok({})
        assert isinstance(object_({}).parse([]), Err)

    def test_transformed_fields(self):
        v = object_({"n": string().transform(int)})
        assert v.parse({"n": "12"}) == Ok({"n": 12})

    def test_shape_is_read_only(self):
        shape = {"a": number()}
        v = object_(shape)
        shape["b"] = string()
        assert v.keyof() == ("a",)
        with pytest.raises(TypeError):
            v.shape["c"] = string()

    def test_unknown_field_passes_through_undefined(self):
        v = object_({"meta": unknown()})
        assert v.parse({}) == Ok({})
        assert v.parse({"meta": None}) == Ok({"meta": None})


class TestObjectDerived:
    base = object_({"name": string(), "age": number(), "kind": literal("user")})

    def test_pick(self):
        v = self.base.pick("name", "kind")
        assert v.keyof() == ("name", "kind")
        assert v.parse({"name": "a", "kind": "user"}) == Ok({"name": "a", "kind": "user"})

    def test_omit(self):
        v = self.base.omit("age")
        assert v.keyof() == ("name", "kind")

    def test_unknown_names_rejected(self):
        with pytest.raises(KeyError):
            self.base.pick("name", "nmae")
        with pytest.raises(KeyError):
            self.base.omit("missing")

    def test_partial(self):
        v = self.base.partial()
        assert v.parse({}) == Ok({})
        assert isinstance(v.parse({"age": "x"}), Err)

    def test_partial_is_shallow(self):
        v = object_({"inner": object_({"x": number()})}).partial()
        assert isinstance(v.parse({}), Ok)
        assert isinstance(v.parse({"inner": {}}), Err)

    def test_extend_overrides(self):
        v = self.base.extend({"age": string(), "email": string()})
        assert v.keyof() == ("name", "age", "kind", "email")
        assert v.field("age") == string()

    def test_extend_with_object(self):
        v = self.base.extend(object_({"email": string()}))
        assert "email" in v.keyof()

    def test_receiver_unchanged(self):
        self.base.pick("name")
        self.base.partial()
        self.base.extend({"x": number()})
        assert self.base.keyof() == ("name", "age", "kind")

    def test_field(self):
        assert self.base.field("kind") == literal("user")
        with pytest.raises(KeyError):
            self.base.field("missing")

    def test_derived_are_objects(self):
        assert isinstance(self.base.omit("name"), ObjectSchema)


class TestIdempotence:
    @pytest.mark.parametrize(
        "schema,value",
        [
            (array(number()), (1, 2)),
            (tuple_([string()], rest=number()), ["a", 1]),
            (record(string()), {"a": "b"}),
            (
                object_({"a": number(), "b": string().optional(), "c": array(string())}),
                {"a": 1, "c": ["x"], "extra": True},
            ),
        ],
    )
    def test_reparse_output(self, schema, value):
        first = schema.parse(value)
        assert isinstance(first, Ok)
        assert schema.parse(first.value) == first

    def test_reparse_undefined_optional(self):
        v = string().optional()
        assert v.parse(v.parse().value) == Ok(UNDEFINED)
