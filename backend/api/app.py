"""HTTP endpoint for found-item notifications.

Usage:
    uvicorn api.app:app --port 8000
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from models import NotificationRequest
from notifications.pipeline import notify_lost_users
from shared.config import NotifyConfig, load_config
from shared.exceptions import NotificationError, UnexpectedError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

NOTIFY_PATH = "/notify-lost-users"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _json(body: dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=body, status_code=status_code, headers=CORS_HEADERS)


def create_app(config: Optional[NotifyConfig] = None) -> FastAPI:
    """Create the API with configuration loaded once at startup."""
    app = FastAPI(title="Campus Finder Notify", version="1.0.0")
    app.state.config = config if config is not None else load_config()

    @app.options(NOTIFY_PATH)
    async def preflight() -> PlainTextResponse:
        return PlainTextResponse("ok", headers=CORS_HEADERS)

    @app.post(NOTIFY_PATH)
    async def notify(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
            notification_request = NotificationRequest.model_validate(payload)
            result = await notify_lost_users(
                notification_request, config=request.app.state.config
            )
            return _json(result.to_response())
        except NotificationError as e:
            return _json(e.to_response(), status_code=e.status_code)
        except Exception:
            logger.exception("notify-lost-users error")
            error = UnexpectedError()
            return _json(error.to_response(), status_code=error.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        # Every method other than POST and OPTIONS lands here
        if exc.status_code == 405:
            return _json({"error": "Method not allowed"}, status_code=405)
        return await http_exception_handler(request, exc)

    return app


app = create_app()
