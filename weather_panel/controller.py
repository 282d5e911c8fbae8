# ABOUTME: View-controller for one weather panel session.
# ABOUTME: Holds the query text and request state and runs the validate, fetch, update cycle.

import logging
from typing import Protocol

from weather_panel.errors import FetchError, FetchErrorKind, ParseError, QueryValidationError
from weather_panel.models import Failed, Idle, Loading, Notification, RequestState, Success, WeatherSnapshot

logger = logging.getLogger(__name__)

VALIDATION_NOTICE = Notification(
    title="Digite uma cidade",
    description="Por favor, insira o nome de uma cidade para buscar.",
)

FETCH_ERROR_TITLE = "Erro ao buscar previsão"

_FETCH_MESSAGES = {
    FetchErrorKind.NOT_FOUND: "Não foi possível encontrar a cidade. Verifique o nome e tente novamente.",
    FetchErrorKind.PROVIDER_ERROR: "O serviço de previsão respondeu com um erro. Tente novamente em instantes.",
    FetchErrorKind.NETWORK_ERROR: "Não foi possível conectar ao serviço de previsão. Verifique sua conexão.",
}
PARSE_MESSAGE = "O serviço de previsão enviou uma resposta inesperada. Tente novamente mais tarde."


LOOKUP_ERRORS = (QueryValidationError, FetchError, ParseError)


class Fetcher(Protocol):
    async def fetch(self, query: str) -> WeatherSnapshot: ...


def notification_for(error: QueryValidationError | FetchError | ParseError) -> Notification:
    """Convert a lookup error into the notification shown to the user."""
    if isinstance(error, QueryValidationError):
        return VALIDATION_NOTICE
    if isinstance(error, FetchError):
        return Notification(title=FETCH_ERROR_TITLE, description=_FETCH_MESSAGES[error.kind])
    return Notification(title=FETCH_ERROR_TITLE, description=PARSE_MESSAGE)


class WeatherController:
    """State holder for one session: query text, request state and the pending notification.

    At most one lookup runs at a time. The Loading state is set before the fetch awaits,
    so a trigger arriving while a lookup is outstanding is ignored rather than queued.
    """

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher
        self.query = ""
        self.state: RequestState = Idle()
        self.notification: Notification | None = None

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def snapshot(self) -> WeatherSnapshot | None:
        if isinstance(self.state, Success):
            return self.state.snapshot
        return None

    def set_query(self, text: str) -> None:
        """Record the latest raw input; validation waits for the trigger."""
        self.query = text

    def dismiss_notification(self) -> Notification | None:
        """Pop the pending notification so it is shown only once."""
        notification, self.notification = self.notification, None
        return notification

    async def submit(self) -> RequestState:
        """Run one lookup for the current query and return the resulting state."""
        if self.is_loading:
            logger.info("Ignoring trigger while a lookup for %r is in flight", self.state.query)
            return self.state

        query = self.query.strip()
        if not query:
            self.notification = VALIDATION_NOTICE
            return self.state

        self.notification = None
        self.state = Loading(query=query)
        try:
            snapshot = await self.fetcher.fetch(query)
        except LOOKUP_ERRORS as e:
            self.notification = notification_for(e)
            self.state = Failed(reason=str(e))
        else:
            self.state = Success(snapshot=snapshot)
        finally:
            if isinstance(self.state, Loading):
                # Unexpected errors propagate; the session must not stay busy.
                self.state = Idle()
        return self.state
