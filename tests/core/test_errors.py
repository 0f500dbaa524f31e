"""Error hierarchy — status mapping and the {"error": message} envelope."""

from projects_api.core.errors import (
    DatabaseError, ErrorCategory, ProjectNotFoundError, ProjectsApiError,
    RequestDecodeError, ResourceNotFoundError,
)


def test_not_found_maps_to_404_with_title_in_message():
    err = ProjectNotFoundError("alpha")
    assert isinstance(err, ResourceNotFoundError)
    assert err.http_status == 404
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert err.to_response() == {"error": "Project 'alpha' not found"}
    assert err.context.project_title == "alpha"


def test_decode_error_maps_to_400():
    err = RequestDecodeError("body: Field required")
    assert err.http_status == 400
    assert err.code == "DECODE_ERROR"
    assert err.to_response() == {"error": "Invalid request body: body: Field required"}


def test_decode_error_includes_details_when_present():
    details = [{"field": "body.title", "message": "Field required", "type": "missing"}]
    err = RequestDecodeError("body.title: Field required", details)
    assert err.to_response()["details"] == details


def test_database_error_maps_to_500():
    err = DatabaseError("Integrity constraint violated", "save")
    assert isinstance(err, ProjectsApiError)
    assert err.http_status == 500
    assert err.operation == "save"
    assert err.to_response() == {
        "error": "Database save failed: Integrity constraint violated",
    }


def test_log_extra_carries_code_and_operation():
    extra = DatabaseError("boom", "delete").log_extra()
    assert extra["error_code"] == "DATABASE_ERROR"
    assert extra["operation"] == "delete"


def test_decode_error_from_json_syntax_error_drops_byte_offset():
    err = RequestDecodeError.from_errors([
        {"loc": ("body", 10), "msg": "JSON decode error", "type": "json_invalid"},
    ])
    assert err.message == "Invalid request body: malformed JSON"
    assert err.details[0]["field"] == "body"


def test_decode_error_from_field_error_names_the_field():
    err = RequestDecodeError.from_errors([
        {"loc": ("status",), "msg": "Input should be 'active' or 'archived'", "type": "enum"},
    ])
    assert err.message == (
        "Invalid request body: status: Input should be 'active' or 'archived'"
    )


def test_decode_error_from_model_level_error_uses_message():
    err = RequestDecodeError.from_errors([
        {"loc": (), "msg": "Value error, title cannot be null", "type": "value_error"},
    ])
    assert err.message == "Invalid request body: Value error, title cannot be null"


def test_decode_error_without_errors_is_generic():
    assert RequestDecodeError.from_errors([]).message == "Invalid request body: malformed request"
