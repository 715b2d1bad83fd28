"""
Unit tests for the TOON encoder.

Run with: pytest tests/test_encoder.py -v
"""
import math
from datetime import date

import pytest

from toon import (
    CyclicStructure,
    DepthExceeded,
    EncodeOptions,
    InvalidConfiguration,
    encode,
    encode_array,
    encode_object,
    encode_scalar,
    needs_quoting,
)


class TestExampleScenarios:
    """Default options: indent 2, comma delimiter."""

    def test_flat_object(self):
        assert encode({"id": 1, "name": "Alice", "active": True}) == "id: 1\nname: Alice\nactive: true"

    def test_primitive_array(self):
        assert encode([1, 2, 3]) == "[3]: 1,2,3"

    def test_uniform_object_array(self):
        data = [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]
        assert encode(data) == "[2,]{id,name}:\n  1,Alice\n  2,Bob"

    def test_empty_array(self):
        assert encode([]) == "[0]:"

    def test_quoted_strings(self):
        assert encode(["a b", "true", "x,y"]) == '[3]: "a b","true","x,y"'

    def test_mixed_array_in_object(self):
        assert encode({"items": [1, {"x": 1}]}) == "items:\n  [2]:\n    - 1\n    - x: 1"

    def test_empty_object_field_is_dropped(self):
        assert encode({"a": {}, "b": 1}) == "b: 1"


class TestScalars:
    """Test scalar rendering."""

    @pytest.mark.parametrize("value, expected", [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-17, "-17"),
        (3.5, "3.5"),
        (45.0, "45"),
        (-0.0, "0"),
        (0.1, "0.1"),
        (1e20, "1e+20"),
        ("hello", "hello"),
        ("", ""),
    ])
    def test_encode_scalar(self, value, expected):
        assert encode_scalar(value) == expected

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_numbers_are_null(self, value):
        assert encode_scalar(value) == "null"

    def test_bool_is_not_a_number(self):
        assert encode([True, 1]) == "[2]: true,1"

    def test_internal_quotes_are_escaped(self):
        assert encode_scalar('say "hi"') == '"say \\"hi\\""'

    @pytest.mark.parametrize("text", ['say "hi"', "a b", "x,y", "null", 'a\\"b', "tab\there"])
    def test_quoted_string_unescapes_to_original(self, text):
        encoded = encode_scalar(text)
        assert encoded.startswith('"') and encoded.endswith('"')
        assert encoded[1:-1].replace('\\"', '"') == text

    def test_unrecognised_types_render_as_text(self):
        assert encode({"day": date(2025, 1, 15)}) == "day: 2025-01-15"

    def test_encode_scalar_rejects_containers(self):
        with pytest.raises(TypeError):
            encode_scalar([1])


class TestNeedsQuoting:
    """Test the quoting rule."""

    @pytest.mark.parametrize("text", [
        "a b", 'a"b', "a\nb", "a\tb", "a,b", "true", "false", "null",
    ])
    def test_quoted(self, text):
        assert needs_quoting(text, ",") is True

    @pytest.mark.parametrize("text", ["Alice", "2025-01-15T10:00:00Z", "True", "nullable", ""])
    def test_not_quoted(self, text):
        assert needs_quoting(text, ",") is False

    def test_active_delimiter_is_quoted(self):
        assert needs_quoting("a|b", "|") is True
        assert needs_quoting("a|b", ",") is False

    def test_comma_quoted_whatever_the_delimiter(self):
        assert needs_quoting("a,b", "|") is True
        assert encode(["x,y", "z"], delimiter="|") == '[2]: "x,y"|z'

    def test_structural_characters_are_left_alone(self):
        assert encode(["a:b", "[1]", "{x}"]) == "[3]: a:b,[1],{x}"


class TestArrays:
    """Test the three array layouts."""

    @pytest.mark.parametrize("count", [0, 1, 2, 50])
    def test_length_marker_matches_element_count(self, count):
        encoded = encode(list(range(count)))
        assert encoded.startswith(f"[{count}]:")

    def test_length_marker_prefix(self):
        assert encode([1, 2], length_marker="#") == "[#2]: 1,2"
        assert encode([], length_marker="#") == "[#0]:"
        assert encode([{"a": 1}], length_marker="#") == "[#1,]{a}:\n  1"

    def test_header_uses_first_element_key_order(self):
        data = [{"a": 1, "b": 2}, {"b": 3, "a": 4}]
        assert encode(data) == "[2,]{a,b}:\n  1,2\n  4,3"

    def test_tab_delimiter_in_table(self):
        data = [{"a": 1, "b": "x y"}]
        assert encode(data, delimiter="\t") == '[1\t]{a\tb}:\n  1\t"x y"'

    def test_pipe_delimiter_inline(self):
        assert encode(["a|b", "c"], delimiter="|") == '[2]: "a|b"|c'

    def test_row_value_count_matches_header(self):
        data = [{"id": i, "name": f"user{i}", "active": i % 2 == 0} for i in range(5)]
        header, *rows = encode(data).split("\n")
        keys = header[header.index("{") + 1:header.index("}")].split(",")
        assert len(keys) == 3
        assert len(rows) == 5
        for row in rows:
            assert len(row.strip().split(",")) == len(keys)

    def test_key_subset_is_not_uniform(self):
        assert encode([{"a": 1}, {"b": 2}]) == "[2]:\n  - a: 1\n  - b: 2"

    def test_key_superset_is_not_uniform(self):
        data = [{"a": 1}, {"a": 1, "b": 2}]
        assert encode(data) == "[2]:\n  - a: 1\n  - a: 1\n    b: 2"

    def test_nested_containers_in_rows_are_json(self):
        data = [{"id": 1, "tags": ["a", "b"]}, {"id": 2, "tags": []}]
        assert encode(data) == '[2,]{id,tags}:\n  1,["a","b"]\n  2,[]'

    def test_nested_arrays_are_listed(self):
        assert encode([[1, 2], [3]]) == "[2]:\n  - [2]: 1,2\n  - [1]: 3"

    def test_nested_mixed_arrays_keep_indenting(self):
        assert encode([[1, {"a": 1}]]) == "[1]:\n  - [2]:\n      - 1\n      - a: 1"

    def test_table_inside_list_item(self):
        data = [[{"a": 1}, {"a": 2}], 3]
        assert encode(data) == "[2]:\n  - [2,]{a}:\n      1\n      2\n  - 3"

    def test_empty_object_list_item(self):
        assert encode([1, {}]) == "[2]:\n  - 1\n  -"

    def test_empty_objects_form_a_table_without_fields(self):
        header, *rows = encode([{}, {}]).split("\n")
        assert header == "[2,]{}:"
        assert rows == ["  ", "  "]

    def test_tuple_is_an_array(self):
        assert encode((1, "a")) == "[2]: 1,a"

    def test_encode_array_at_depth(self):
        assert encode_array([1, 2], depth=1) == "  [2]: 1,2"
        assert encode_array([{"a": 1}], depth=1) == "  [1,]{a}:\n    1"


class TestObjects:
    """Test object layout."""

    def test_nested_object(self):
        assert encode({"a": {"b": 1, "c": 2}}) == "a:\n  b: 1\n  c: 2"

    def test_single_line_nested_value_stays_on_key_line(self):
        assert encode({"a": {"b": 1}}) == "a: b: 1"

    def test_deeply_nested_object(self):
        data = {"a": {"b": {"c": 1, "d": 2}}}
        assert encode(data) == "a:\n  b:\n    c: 1\n    d: 2"

    def test_table_field(self):
        data = {"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}
        assert encode(data) == "users:\n  [2,]{id,name}:\n    1,Alice\n    2,Bob"

    def test_array_fields_on_one_line(self):
        assert encode({"tags": ["a", "b"], "none": []}) == "tags: [2]: a,b\nnone: [0]:"

    def test_multiline_string_stays_on_key_line(self):
        assert encode({"note": "a\nb"}) == 'note: "a\nb"'

    def test_object_of_empty_objects_keeps_its_key(self):
        assert encode({"a": {"b": {}}, "c": 1}) == "a: \nc: 1"

    def test_empty_root_object(self):
        assert encode({}) == ""
        assert encode_object({}) == ""

    def test_custom_indent(self):
        assert encode({"a": {"b": 1, "c": 2}}, indent=4) == "a:\n    b: 1\n    c: 2"

    def test_key_order_is_preserved(self):
        assert encode({"z": 1, "a": 2}) == "z: 1\na: 2"

    def test_shared_subtree_is_not_a_cycle(self):
        shared = {"x": 1, "y": 2}
        assert encode({"a": shared, "b": shared}) == "a:\n  x: 1\n  y: 2\nb:\n  x: 1\n  y: 2"


class TestErrors:
    """Test configuration, depth and cycle errors."""

    def test_options_object(self):
        options = EncodeOptions(delimiter="|")
        assert encode([1, 2], options) == "[2]: 1|2"

    def test_overrides_merge_with_options(self):
        options = EncodeOptions(delimiter="|")
        assert encode([1, 2], options, length_marker="#") == "[#2]: 1|2"

    @pytest.mark.parametrize("overrides", [
        {"delimiter": ":"},
        {"delimiter": "]"},
        {"delimiter": ",,"},
        {"delimiter": "1"},
        {"delimiter": "."},
        {"delimiter": "e"},
        {"delimiter": "+"},
        {"indent": 0},
        {"length_marker": "1"},
        {"max_depth": 0},
        {"unknown": True},
    ])
    def test_invalid_configuration(self, overrides):
        with pytest.raises(InvalidConfiguration):
            encode([1], **overrides)

    def test_digit_delimiter_cannot_corrupt_the_length(self):
        with pytest.raises(InvalidConfiguration):
            encode([{"a": 11}, {"a": 2}], delimiter="1")

    def test_depth_limit(self):
        assert encode([[1]], max_depth=2) == "[1]:\n  - [1]: 1"
        with pytest.raises(DepthExceeded) as exc_info:
            encode([[[1]]], max_depth=2)
        assert exc_info.value.depth == 3
        assert exc_info.value.max_depth == 2

    def test_deep_input_fails_before_the_stack_does(self):
        value = 1
        for _ in range(500):
            value = [value]
        with pytest.raises(DepthExceeded):
            encode(value)

    def test_depth_limit_covers_row_cells(self):
        data = [{"a": [[1]]}]
        with pytest.raises(DepthExceeded):
            encode(data, max_depth=2)

    def test_cyclic_list(self):
        items = [1]
        items.append(items)
        with pytest.raises(CyclicStructure):
            encode(items)

    def test_cyclic_dict(self):
        node = {"id": 1}
        node["self"] = node
        with pytest.raises(CyclicStructure, match="object"):
            encode(node)

    def test_cycle_through_table_cell(self):
        rows = [{"id": 1, "children": []}]
        rows[0]["children"].append(rows)
        with pytest.raises(CyclicStructure):
            encode(rows)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            encode([1], delimiter="-")
