"""Unit tests for validation error flattening and upstream messages."""

from sqlalchemy.exc import IntegrityError

from edclub.middleware.error_handler import flatten_validation_errors, upstream_message


class TestFlattenValidationErrors:
    def test_field_errors_grouped_by_field(self):
        errors = [
            {"type": "missing", "loc": ("body", "title"), "msg": "Field required"},
            {"type": "string_too_long", "loc": ("body", "title"), "msg": "Too long"},
            {"type": "uuid_parsing", "loc": ("body", "teamId"), "msg": "Input should be a valid UUID"},
        ]
        assert flatten_validation_errors(errors) == {
            "formErrors": [],
            "fieldErrors": {
                "title": ["Field required", "Too long"],
                "teamId": ["Input should be a valid UUID"],
            },
        }

    def test_body_level_errors_are_form_errors(self):
        errors = [{"type": "model_attributes_type", "loc": ("body",), "msg": "Input should be an object"}]
        assert flatten_validation_errors(errors)["formErrors"] == ["Input should be an object"]

    def test_invalid_json_is_a_form_error(self):
        errors = [{"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error"}]
        result = flatten_validation_errors(errors)
        assert result == {"formErrors": ["JSON decode error"], "fieldErrors": {}}

    def test_query_parameters_use_their_name(self):
        errors = [{"type": "int_parsing", "loc": ("query", "limit"), "msg": "bad"}]
        assert flatten_validation_errors(errors)["fieldErrors"] == {"limit": ["bad"]}


class TestUpstreamMessage:
    def test_prefers_driver_message(self):
        exc = IntegrityError("INSERT ...", {}, Exception("duplicate key value"))
        assert upstream_message(exc) == "duplicate key value"
