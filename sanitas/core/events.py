"""Request Events — the runtime-neutral view of one incoming HTTP request.

Invariants:
    - ApiEvent is built either from a Lambda proxy event or from a FastAPI request
    - Missing pathParameters / queryStringParameters become empty dicts, never None
    - json_body() raises BadRequestError on malformed JSON or a non-object payload
"""

import json
from dataclasses import dataclass, field
from typing import Any

from sanitas.core.errors import BadRequestError


@dataclass(frozen=True)
class ApiEvent:
    """One HTTP request as seen by an endpoint operation."""
    http_method: str
    path: str = ""
    path_parameters: dict[str, str] = field(default_factory=dict)
    query_parameters: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    request_id: str | None = None

    @classmethod
    def from_lambda(cls, event: dict, context: Any = None) -> "ApiEvent":
        request_id = getattr(context, "aws_request_id", None)
        if request_id is None:
            request_id = (event.get("requestContext") or {}).get("requestId")
        return cls(
            http_method=(event.get("httpMethod") or "").upper(),
            path=event.get("path") or "",
            path_parameters=dict(event.get("pathParameters") or {}),
            query_parameters=dict(event.get("queryStringParameters") or {}),
            body=event.get("body"),
            request_id=request_id,
        )

    def path_param(self, name: str) -> str | None:
        value = self.path_parameters.get(name)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def json_body(self) -> dict:
        """Parse the body as a JSON object (empty body → empty dict)."""
        if not self.body:
            return {}
        try:
            payload = json.loads(self.body)
        except (TypeError, ValueError):
            raise BadRequestError("Invalid request: body is not valid JSON.")
        if not isinstance(payload, dict):
            raise BadRequestError("Invalid request: body must be a JSON object.")
        return payload
