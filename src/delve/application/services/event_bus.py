from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type


class EventBus:
    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[object], List[tuple[int, int, Callable[[object], None]]]] = defaultdict(list)
        self._next_order = 0
        self._last_publish_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: Callable[[object], None], *, priority: int = 100) -> None:
        """Lower priorities run first; ties keep subscription order."""
        self._subscribers[event_type].append((int(priority), self._next_order, handler))
        self._next_order += 1
        self._subscribers[event_type].sort(key=lambda row: (row[0], row[1]))

    def publish(self, event: object) -> None:
        errors: List[Exception] = []
        event_type = type(event)
        for priority, _, handler in self._subscribers[event_type]:
            try:
                handler(event)
            except Exception as exc:
                errors.append(exc)
                handler_name = getattr(handler, "__qualname__", getattr(handler, "__name__", repr(handler)))
                self._logger.exception(
                    "Game event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": handler_name,
                        "priority": priority,
                    },
                )
        self._last_publish_errors = errors

    def publish_all(self, events: List[object]) -> None:
        errors: List[Exception] = []
        for event in events:
            self.publish(event)
            errors.extend(self._last_publish_errors)
        self._last_publish_errors = errors

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)
