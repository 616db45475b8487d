from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Optional
from storerate.auth.utils import decode_session_token
from storerate.core.config import settings


class AuthMiddleware(BaseHTTPMiddleware):
    """Binds the signed session id from the cookie to ``request.state``.

    Resolving the id to a user needs the database, so that happens in the
    ``storerate.auth.dependencies`` functions the routes depend on.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.session_id = None  # default

        token: Optional[str] = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if token:
            request.state.session_id = decode_session_token(token)

        response = await call_next(request)
        return response
