import logging
from typing import Any, Callable

from pydantic import ValidationError

from wemeet_webhook.errors import ParseError
from wemeet_webhook.schemas.events import Event, MeetingInfo

EventHandler = Callable[[Event], Any]

MEETING_CREATED = "meeting.created"

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Routes parsed events to the handler registered for their type.

    Types without a handler are logged and dropped, so new event types from
    the platform never fail a callback.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)
        self._handlers: dict[str, EventHandler] = {}

    def register(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type] = handler

    def on(self, event_type: str) -> Callable[[EventHandler], EventHandler]:
        def decorator(handler: EventHandler) -> EventHandler:
            self.register(event_type, handler)
            return handler

        return decorator

    def handler_for(self, event_type: str) -> EventHandler | None:
        return self._handlers.get(event_type)

    def parse(self, decoded: str) -> Event:
        try:
            return Event.model_validate_json(decoded)
        except ValidationError as exc:
            self.logger.error(f"Event payload could not be parsed: {exc}")
            raise ParseError(f"Invalid event payload: {exc}") from exc

    def route(self, event: Event) -> Any:
        handler = self.handler_for(event.event)
        if handler is None:
            self.logger.info(f"Received unknown event {event.event}: {event}")
            return None
        self.logger.info(f"Received {event.event}: {event}")
        return handler(event)

    def dispatch(self, decoded: str) -> Any:
        return self.route(self.parse(decoded))


def handle_meeting_created(event: Event) -> MeetingInfo | None:
    payload = event.payload
    first = payload[0] if isinstance(payload, list) and payload else None
    meeting_info = first.get("meeting_info") if isinstance(first, dict) else None
    if not meeting_info:
        logger.error(f"No meeting info in {MEETING_CREATED} event {event.trace_id}")
        return None
    return MeetingInfo.model_validate(meeting_info)


def default_dispatcher(logger: logging.Logger | None = None) -> EventDispatcher:
    dispatcher = EventDispatcher(logger)
    dispatcher.register(MEETING_CREATED, handle_meeting_created)
    return dispatcher
