from datetime import datetime
from typing import Any, Callable, Optional
import itertools
import logging

from singleton_logger.record import LogRecord


ERROR_ATTR = "singleton_error"
STACK_TRACE_ATTR = "singleton_stack_trace"

RecordCallback = Callable[[LogRecord], None]

_instance_ids = itertools.count()


class _CallbackHandler(logging.Handler):
    def __init__(self, callback: RecordCallback, name: str):
        super().__init__(level=logging.NOTSET)
        self.callback = callback
        self.dispatcher_name = name

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.callback(
                LogRecord(
                    message=record.getMessage(),
                    error=getattr(record, ERROR_ATTR, None),
                    stack_trace=getattr(record, STACK_TRACE_ATTR, None),
                    logger_name=self.dispatcher_name,
                    timestamp=datetime.fromtimestamp(record.created),
                )
            )
        except Exception:
            self.handleError(record)


class RecordDispatcher:
    """
    Рассылка записей подписчикам через именованный logging.Logger.

    Каждый publish синхронно доставляется всем подписчикам
    в порядке подписки. Уровни не фильтруются.
    """

    def __init__(self, name: str):
        self.name = name
        # Свой logging.Logger на каждый диспетчер, даже при одинаковом name.
        self._logger = logging.getLogger(f"{name}.{next(_instance_ids)}")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        self._handlers: dict[RecordCallback, _CallbackHandler] = {}

    def subscribe(self, callback: RecordCallback) -> None:
        if callback in self._handlers:
            return
        handler = _CallbackHandler(callback, self.name)
        self._handlers[callback] = handler
        self._logger.addHandler(handler)

    def unsubscribe(self, callback: RecordCallback) -> None:
        handler = self._handlers.pop(callback, None)
        if handler is not None:
            self._logger.removeHandler(handler)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def publish(
        self,
        message: Any,
        error: Optional[Any] = None,
        stack_trace: Optional[Any] = None,
    ) -> None:
        self._logger.info(
            message,
            extra={ERROR_ATTR: error, STACK_TRACE_ATTR: stack_trace},
        )
