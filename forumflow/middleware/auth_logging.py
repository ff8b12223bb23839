from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("forumflow")

# Paths whose handlers always require a bearer token
PROTECTED_PREFIXES = ("/api/me", "/api/users", "/api/reports")


class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        auth_header = request.headers.get("Authorization")
        path = request.url.path

        if not auth_header and path.startswith(PROTECTED_PREFIXES):
            logger.warning(f"Protected endpoint {path} accessed without auth header")

        response = await call_next(request)

        if response.status_code in [401, 403]:
            logger.warning(f"Auth error: {response.status_code} on {request.method} {path}")

        return response
