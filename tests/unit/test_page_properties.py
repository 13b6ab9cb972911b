"""Tests for page property values and property items."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from factories import rich_text_json, user_json

from typednotion.errors import NotionDecodeError, NotionInvalidParamsError
from typednotion.models import (
    DatabasePageProperty,
    Date,
    FormulaResult,
    FormulaResultType,
    ObjectReference,
    PagePropItem,
    PagePropListResponse,
    PropertyType,
    RichText,
    RollupResult,
    SelectOption,
    UniqueID,
    User,
    decode_page_property_response,
)
from typednotion.models.page_properties import decode_page_properties, encode_page_properties

# ---------------------------------------------------------------------------
# Decoding values
# ---------------------------------------------------------------------------


class TestDecodeValues:
    def test_title(self):
        prop = DatabasePageProperty.from_json({"id": "title", "type": "title", "title": [rich_text_json("Task")]})
        assert prop.type is PropertyType.TITLE
        assert prop.value[0].plain_text == "Task"
        assert prop.id == "title"

    def test_number_null(self):
        assert DatabasePageProperty.from_json({"type": "number", "number": None}).value is None

    def test_number_rejects_string(self):
        with pytest.raises(NotionDecodeError, match="expected a number"):
            DatabasePageProperty.from_json({"type": "number", "number": "3"})

    def test_checkbox_false_is_a_value(self):
        prop = DatabasePageProperty.from_json({"type": "checkbox", "checkbox": False})
        assert prop.value is False

    def test_checkbox_true(self):
        assert DatabasePageProperty.from_json({"type": "checkbox", "checkbox": True}).value is True

    def test_select_and_multi_select(self):
        select = DatabasePageProperty.from_json({"type": "select", "select": {"name": "Done", "color": "green"}})
        assert select.value.name == "Done"
        multi = DatabasePageProperty.from_json({
            "type": "multi_select",
            "multi_select": [{"name": "a"}, {"name": "b"}],
        })
        assert [option.name for option in multi.value] == ["a", "b"]

    def test_date_range(self):
        prop = DatabasePageProperty.from_json({
            "type": "date",
            "date": {"start": "2021-05-23", "end": "2021-05-25", "time_zone": None},
        })
        assert str(prop.value.start) == "2021-05-23"
        assert str(prop.value.end) == "2021-05-25"

    def test_people(self):
        prop = DatabasePageProperty.from_json({"type": "people", "people": [user_json("u1")]})
        assert prop.value[0].id == "u1"
        assert prop.value[0].person.email == "jane@example.com"

    def test_relation(self):
        prop = DatabasePageProperty.from_json({"type": "relation", "relation": [{"id": "p2"}]})
        assert prop.value == [ObjectReference("p2")]

    def test_url_null(self):
        assert DatabasePageProperty.from_json({"type": "url", "url": None}).value is None

    def test_created_time(self):
        prop = DatabasePageProperty.from_json({"type": "created_time", "created_time": "2021-05-24T05:06:34.827Z"})
        assert prop.value == datetime(2021, 5, 24, 5, 6, 34, 827000, tzinfo=timezone.utc)

    def test_last_edited_by(self):
        prop = DatabasePageProperty.from_json({"type": "last_edited_by", "last_edited_by": {"object": "user", "id": "u1"}})
        assert prop.value == User(id="u1")

    def test_unique_id(self):
        prop = DatabasePageProperty.from_json({"type": "unique_id", "unique_id": {"number": 7, "prefix": "T"}})
        assert prop.value == UniqueID(7, "T")

    def test_unknown_type(self):
        with pytest.raises(NotionDecodeError, match="unknown page property type"):
            DatabasePageProperty.from_json({"type": "button", "button": {}})


class TestFormulaAndRollup:
    @pytest.mark.parametrize(
        ("data", "value"),
        [
            ({"type": "string", "string": "hello"}, "hello"),
            ({"type": "number", "number": 4.5}, 4.5),
            ({"type": "boolean", "boolean": True}, True),
        ],
    )
    def test_formula_results(self, data, value):
        prop = DatabasePageProperty.from_json({"type": "formula", "formula": data})
        assert prop.value.type == data["type"]
        assert prop.value.value == value
        assert prop.to_json()["formula"] == data

    def test_formula_date(self):
        result = FormulaResult.from_json({"type": "date", "date": {"start": "2021-05-23", "end": None}})
        assert isinstance(result.value, Date)

    def test_unknown_formula_type_keeps_tag(self):
        result = FormulaResult.from_json({"type": "vector", "vector": [1, 2]})
        assert result.type == "vector"
        assert result.value is None

    def test_enum_type_is_normalized(self):
        assert FormulaResult(FormulaResultType.STRING, "x").type == "string"

    def test_rollup_array(self):
        rollup = RollupResult.from_json({
            "type": "array",
            "function": "show_original",
            "array": [{"type": "number", "number": 1}, {"type": "number", "number": 2}],
        })
        assert [item.value for item in rollup.value] == [1, 2]
        assert rollup.function == "show_original"

    def test_rollup_number(self):
        rollup = RollupResult.from_json({"type": "number", "number": 3, "function": "sum"})
        assert rollup.value == 3
        assert rollup.to_json() == {"type": "number", "number": 3, "function": "sum"}


# ---------------------------------------------------------------------------
# Constructing and encoding values
# ---------------------------------------------------------------------------


class TestConstructors:
    def test_title_from_string(self):
        prop = DatabasePageProperty.title("Task")
        assert prop.to_json() == {
            "type": "title",
            "title": [{"type": "text", "text": {"content": "Task", "link": None}, "plain_text": "Task"}],
        }

    def test_checkbox(self):
        assert DatabasePageProperty.checkbox(False).to_json() == {"type": "checkbox", "checkbox": False}

    def test_select(self):
        assert DatabasePageProperty.select("Done").to_json() == {"type": "select", "select": {"name": "Done"}}

    def test_clear_select(self):
        assert DatabasePageProperty.select(None).to_json() == {"type": "select", "select": None}

    def test_people_and_relation(self):
        assert DatabasePageProperty.people(["u1"]).to_json() == {
            "type": "people",
            "people": [{"object": "user", "id": "u1"}],
        }
        assert DatabasePageProperty.relation(["p1"]).to_json() == {"type": "relation", "relation": [{"id": "p1"}]}

    def test_number_rejects_bool(self):
        with pytest.raises(NotionInvalidParamsError, match="invalid value for 'number'"):
            DatabasePageProperty(PropertyType.NUMBER, True)

    def test_checkbox_requires_bool(self):
        with pytest.raises(NotionInvalidParamsError):
            DatabasePageProperty(PropertyType.CHECKBOX, None)

    def test_rich_text_requires_runs(self):
        with pytest.raises(NotionInvalidParamsError):
            DatabasePageProperty(PropertyType.RICH_TEXT, "plain string")

    def test_encode_mapping(self):
        encoded = encode_page_properties({
            "Name": DatabasePageProperty.title([RichText.plain("Task")]),
            "Estimate": DatabasePageProperty.number(3),
            "Stage": DatabasePageProperty(PropertyType.STATUS, SelectOption(id="o1")),
        })
        assert encoded["Estimate"] == {"type": "number", "number": 3}
        assert encoded["Stage"] == {"type": "status", "status": {"id": "o1"}}

    def test_decode_mapping(self):
        props = decode_page_properties({
            "Done": {"id": "a", "type": "checkbox", "checkbox": True},
            "Estimate": {"id": "b", "type": "number", "number": 2},
        })
        assert props["Done"].value is True
        assert props["Estimate"].value == 2


# ---------------------------------------------------------------------------
# Property items
# ---------------------------------------------------------------------------


class TestPropertyItems:
    def test_single_item(self):
        item = decode_page_property_response({"object": "property_item", "id": "n", "type": "number", "number": 2})
        assert isinstance(item, PagePropItem)
        assert item.value == 2

    def test_paginated_title(self):
        response = decode_page_property_response({
            "object": "list",
            "results": [
                {"object": "property_item", "id": "title", "type": "title", "title": rich_text_json("Hello ")},
                {"object": "property_item", "id": "title", "type": "title", "title": rich_text_json("world")},
            ],
            "has_more": True,
            "next_cursor": "c2",
            "property_item": {"id": "title", "type": "title", "title": {}},
        })
        assert isinstance(response, PagePropListResponse)
        assert [item.value.plain_text for item in response.results] == ["Hello ", "world"]
        assert response.has_more is True
        assert response.next_cursor == "c2"
        assert response.property_item.type is PropertyType.TITLE

    def test_paginated_rollup_carries_result(self):
        response = decode_page_property_response({
            "object": "list",
            "results": [],
            "has_more": False,
            "next_cursor": None,
            "property_item": {
                "id": "r",
                "type": "rollup",
                "rollup": {"type": "number", "number": 10, "function": "sum"},
            },
        })
        assert response.property_item.value.value == 10
        assert response.results == []
