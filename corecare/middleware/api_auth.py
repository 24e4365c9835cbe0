import logging
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

from corecare.core.config import settings
from corecare.core.security import verify_api_key

logger = logging.getLogger(__name__)


def public_path_prefixes():
    """Paths the app and load balancer reach without an API key"""
    api = settings.API_V1_STR
    return ("/health", "/metrics", f"{api}/docs", f"{api}/redoc", f"{api}/openapi.json", f"{api}/privacy")


def api_key_from(request: Request) -> Optional[str]:
    # Header from the mobile client, query parameter for links opened in a browser
    return request.headers.get("X-API-Key") or request.query_params.get("api_key")


class APIKeyMiddleware:
    """
    Rejects requests without a configured X-API-Key when REQUIRE_API_KEY is on
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not settings.REQUIRE_API_KEY:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        path = request.url.path
        if not path.startswith(public_path_prefixes()):
            api_key = api_key_from(request)
            if not api_key or not verify_api_key(api_key):
                logger.warning(f"[APIKey] Rejected {request.method} {path}")
                rejection = JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"status": "error", "message": "Invalid or missing API key"},
                )
                await rejection(scope, receive, send)
                return

        await self.app(scope, receive, send)
