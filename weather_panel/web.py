# ABOUTME: ASGI web entry point for the weather panel UI.
# ABOUTME: Creates a Starlette app with per-session controllers and serves the page and the lookup trigger.

import logging
from collections import OrderedDict
from collections.abc import Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import uvicorn
from starlette.applications import Starlette
from starlette.datastructures import MutableHeaders
from starlette.middleware import Middleware
from starlette.requests import HTTPConnection, Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from weather_panel.config import Settings, load_settings
from weather_panel.controller import WeatherController
from weather_panel.deps import WeatherDeps, create_http_client
from weather_panel.render import PAGE_TEMPLATE, page_context, templates
from weather_panel.weather_service import WeatherFetcher

logger = logging.getLogger(__name__)

SESSION_COOKIE = "weather_session"
_CONTROLLER_KEY = "weather_controller"
HEALTH_PATH = "/healthz"


class SessionRegistry:
    """In-memory map of session id to controller, bounded by ``max_sessions``.

    The least recently used idle session is evicted first; a session with a lookup in
    flight is never evicted.
    """

    def __init__(self, factory: Callable[[], WeatherController], max_sessions: int = 1000):
        self.factory = factory
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, WeatherController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get_or_create(self, session_id: str | None) -> tuple[str, WeatherController, bool]:
        """Return ``(session_id, controller, created)`` for a cookie value, which may be unknown or None."""
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id], False

        session_id = uuid4().hex
        self._evict()
        controller = self.factory()
        self._sessions[session_id] = controller
        return session_id, controller, True

    def _evict(self) -> None:
        while len(self._sessions) >= self.max_sessions:
            idle = next((sid for sid, c in self._sessions.items() if not c.is_loading), None)
            if idle is None:
                logger.warning("Session registry full with %d busy sessions", len(self._sessions))
                return
            del self._sessions[idle]


class ControllerSessionMiddleware:
    """ASGI middleware that attaches the caller's WeatherController to the request scope.

    Reads the session cookie, resolves or creates the controller, and adds a Set-Cookie
    header to the response when a new session was started.
    """

    def __init__(self, app, registry: SessionRegistry):
        self.app = app
        self.registry = registry

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or scope["path"] == HEALTH_PATH:
            await self.app(scope, receive, send)
            return

        cookie = HTTPConnection(scope).cookies.get(SESSION_COOKIE)
        session_id, controller, created = self.registry.get_or_create(cookie)
        scope[_CONTROLLER_KEY] = controller

        async def send_with_cookie(message):
            if created and message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.append("set-cookie", f"{SESSION_COOKIE}={session_id}; Path=/; HttpOnly; SameSite=Lax")
            await send(message)

        await self.app(scope, receive, send_with_cookie)


def _controller(request: Request) -> WeatherController:
    return request.scope[_CONTROLLER_KEY]


def _page(request: Request, controller: WeatherController) -> HTMLResponse:
    context = page_context(
        controller.query,
        controller.snapshot,
        loading=controller.is_loading,
        notification=controller.dismiss_notification(),
    )
    return templates.TemplateResponse(request, PAGE_TEMPLATE, context)


async def show_page(request: Request) -> HTMLResponse:
    """Render the page for the caller's current state."""
    return _page(request, _controller(request))


async def submit_lookup(request: Request) -> HTMLResponse:
    """Handle the trigger: record the typed city, run one lookup and render the outcome."""
    controller = _controller(request)
    if controller.is_loading:
        # Re-entry while busy: show the busy page and leave the running lookup alone.
        return _page(request, controller)

    form = await request.form()
    city = form.get("city", "")
    controller.set_query(city if isinstance(city, str) else "")
    await controller.submit()
    return _page(request, controller)


async def healthz(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(settings: Settings | None = None, deps: WeatherDeps | None = None) -> Starlette:
    """Build the Starlette app.

    With ``deps`` the caller owns the HTTP client; otherwise one is created from ``settings``
    (loaded from the environment when omitted) and closed on shutdown.
    """
    owns_client = deps is None
    if deps is None:
        deps = WeatherDeps(http_client=create_http_client(), settings=settings or load_settings())

    fetcher = WeatherFetcher(deps)
    registry = SessionRegistry(lambda: WeatherController(fetcher), deps.settings.max_sessions)

    @asynccontextmanager
    async def lifespan(app):
        yield
        if owns_client:
            await deps.http_client.aclose()

    app = Starlette(
        routes=[
            Route("/", show_page, methods=["GET"]),
            Route("/", submit_lookup, methods=["POST"]),
            Route(HEALTH_PATH, healthz, methods=["GET"]),
        ],
        middleware=[Middleware(ControllerSessionMiddleware, registry=registry)],
        lifespan=lifespan,
    )
    app.state.sessions = registry
    app.state.deps = deps
    return app


def main() -> None:
    """Console entry point: load settings, configure logging and serve with uvicorn."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Serving weather panel on http://%s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
