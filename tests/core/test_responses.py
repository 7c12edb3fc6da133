"""Response Builder — fluent assembly of immutable response descriptors.

Tests:
    - Status, headers and body land in the built ApiResponse
    - Non-string bodies are JSON-encoded; strings are kept verbatim
    - Built responses cannot be mutated, not even through the builder
"""

import dataclasses

import pytest

from sanitas.core.responses import ApiResponse, create_response, cors_headers


def test_builder_sets_all_fields():
    response = (
        create_response()
        .set_status_code(404)
        .add_cors_headers()
        .set_body({"message": "No encontrado"})
        .build()
    )

    assert response.status_code == 404
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.json() == {"message": "No encontrado"}


def test_string_body_is_not_reencoded():
    response = create_response().set_body('{"a": 1}').build()

    assert response.body == '{"a": 1}'


def test_non_ascii_body_kept_readable():
    response = create_response().set_body({"error": "CUI ya existe."}).build()

    assert "CUI ya existe." in response.body


def test_cors_headers_default_whitelist():
    assert cors_headers() == {
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, PUT, OPTIONS",
    }


def test_cors_headers_custom_methods():
    response = create_response().add_cors_headers(("GET",)).build()

    assert response.headers["Access-Control-Allow-Methods"] == "GET"


def test_built_response_is_frozen():
    response = create_response().build()

    with pytest.raises(dataclasses.FrozenInstanceError):
        response.status_code = 500
    with pytest.raises(TypeError):
        response.headers["X-Extra"] = "1"


def test_builder_changes_after_build_do_not_leak():
    builder = create_response().add_header("X-A", "1")
    first = builder.build()

    builder.add_header("X-B", "2").set_status_code(201)

    assert "X-B" not in first.headers
    assert first.status_code == 200


def test_to_dict_is_lambda_envelope():
    envelope = ApiResponse(status_code=200, body="[]").to_dict()

    assert envelope == {"statusCode": 200, "headers": {}, "body": "[]"}
