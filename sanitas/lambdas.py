"""Lambda Entry Points — one callable per endpoint for the serverless deployment.

Invariants:
    - handler(event, context) always returns a {statusCode, headers, body} dict,
      including when settings or the engine cannot be built
    - Each invocation runs in its own event loop with a NullPool engine:
      the DB connection opens and closes inside the invocation
    - Settings are passed at construction or resolved once on first call

Usage (template handler path):
    sanitas.lambdas.get_surgical_history
"""

import asyncio
import logging

from sanitas.config import Settings, get_settings
from sanitas.core.events import ApiEvent
from sanitas.infrastructure.database import DatabaseSessionManager
from sanitas.infrastructure.observability import setup_logging
from sanitas.services import endpoints
from sanitas.services.pipeline import Endpoint, dispatch, internal_error_response

logger = logging.getLogger(__name__)


class LambdaHandler:
    """Adapts an Endpoint to the AWS Lambda proxy-integration calling convention."""

    def __init__(
        self,
        endpoint: Endpoint,
        settings: Settings | None = None,
        db: DatabaseSessionManager | None = None,
    ):
        self.endpoint = endpoint
        self._settings = settings
        self._db = db

    def _database(self) -> DatabaseSessionManager:
        if self._db is None:
            settings = self._settings or get_settings()
            setup_logging(settings.log_level, settings.log_format)
            self._db = DatabaseSessionManager(settings.postgres_url, null_pool=True)
        return self._db

    def __call__(self, event: dict, context=None) -> dict:
        extra = {
            "request_id": getattr(context, "aws_request_id", None),
            "endpoint": self.endpoint.name,
        }
        logger.info(f"Invoking {self.endpoint.name}", extra=extra)
        try:
            api_event = ApiEvent.from_lambda(event, context)
            db = self._database()
        except Exception as e:
            logger.error(
                f"Could not prepare {self.endpoint.name}: {e}",
                exc_info=True, extra={**extra, "status_code": 500},
            )
            return internal_error_response(e).to_dict()
        response = asyncio.run(dispatch(self.endpoint, api_event, db))
        return response.to_dict()


create_patient = LambdaHandler(endpoints.CREATE_PATIENT)
search_patients = LambdaHandler(endpoints.SEARCH_PATIENTS)
check_cui = LambdaHandler(endpoints.CHECK_CUI)
get_general_info = LambdaHandler(endpoints.GET_GENERAL_INFO)
get_student_info = LambdaHandler(endpoints.GET_STUDENT_INFO)
get_collaborator_info = LambdaHandler(endpoints.GET_COLLABORATOR_INFO)
get_surgical_history = LambdaHandler(endpoints.GET_SURGICAL_HISTORY)
create_surgical_history = LambdaHandler(endpoints.CREATE_SURGICAL_HISTORY)
