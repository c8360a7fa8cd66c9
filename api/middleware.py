"""Request-scoped middleware for API requests."""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from utils.user_context import set_current_actor, clear_current_actor


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a unique request ID to every request."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class ActorMiddleware(BaseHTTPMiddleware):
    """
    Reads the acting user's email from a header into the actor context.

    This identifies, it does not authenticate. Reads are open to anyone;
    mutations without an actor are refused so comment authorship is
    always known.
    """

    READ_METHODS = {"GET", "HEAD", "OPTIONS"}

    def __init__(self, app, header_name: str = "X-Actor-Email"):
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next):
        actor = (request.headers.get(self._header_name) or "").strip()

        if not actor and request.method not in self.READ_METHODS:
            return JSONResponse(
                status_code=401,
                content=error_response(
                    ErrorCodes.ACTOR_REQUIRED,
                    f"{self._header_name} header is required",
                    getattr(request.state, "request_id", None),
                ).model_dump(mode="json"),
            )

        if actor:
            set_current_actor(actor)
            request.state.actor = actor
        else:
            request.state.actor = None

        try:
            return await call_next(request)
        finally:
            clear_current_actor()
