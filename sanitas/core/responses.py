"""Response Builder — fluent assembly of the {statusCode, headers, body} envelope.

Invariants:
    - build() returns a frozen ApiResponse; later builder calls never mutate it
    - body is always a string; non-string payloads are JSON-encoded
    - CORS headers are the same for every endpoint (single method whitelist)
    - Pure data assembly: no IO, no error conditions
"""

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_CORS_METHODS = ("GET", "POST", "PUT", "OPTIONS")


def cors_headers(methods: tuple[str, ...] = DEFAULT_CORS_METHODS) -> dict[str, str]:
    """Permissive CORS headers: any origin, JSON content type, method whitelist."""
    return {
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(methods),
    }


@dataclass(frozen=True)
class ApiResponse:
    """Immutable response descriptor handed back to the HTTP runtime."""
    status_code: int
    headers: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    body: str = ""

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None

    def to_dict(self) -> dict:
        """Lambda proxy integration envelope."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }


class ResponseBuilder:
    """Fluent builder: create_response().set_status_code(200).add_cors_headers().set_body(x).build()"""

    def __init__(self):
        self._status_code = 200
        self._headers: dict[str, str] = {}
        self._body = ""

    def set_status_code(self, status_code: int) -> "ResponseBuilder":
        self._status_code = status_code
        return self

    def add_header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def add_cors_headers(
        self, methods: tuple[str, ...] = DEFAULT_CORS_METHODS,
    ) -> "ResponseBuilder":
        self._headers.update(cors_headers(methods))
        return self

    def set_body(self, body: Any) -> "ResponseBuilder":
        """Set the body; strings are taken verbatim, anything else is JSON-encoded."""
        if isinstance(body, str):
            self._body = body
        else:
            self._body = json.dumps(body, ensure_ascii=False, default=str)
        return self

    def build(self) -> ApiResponse:
        return ApiResponse(
            status_code=self._status_code,
            headers=MappingProxyType(dict(self._headers)),
            body=self._body,
        )


def create_response() -> ResponseBuilder:
    return ResponseBuilder()
