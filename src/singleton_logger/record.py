from dataclasses import dataclass, field
from datetime import datetime
from types import TracebackType
from typing import Any, Optional
import traceback


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


@dataclass(frozen=True)
class LogRecord:
    message: str
    error: Optional[Any] = None
    stack_trace: Optional[Any] = None
    logger_name: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime(TIMESTAMP_FORMAT)


def _format_error(error: Any) -> str:
    if isinstance(error, BaseException):
        text = str(error)
        return f"{type(error).__name__}: {text}" if text else type(error).__name__
    return str(error)


def _format_stack_trace(stack_trace: Any) -> str:
    if isinstance(stack_trace, TracebackType):
        return "".join(traceback.format_tb(stack_trace)).rstrip("\n")
    return str(stack_trace).rstrip("\n")


def format_record(record: LogRecord, include_error: bool = False) -> str:
    """
    Превращает запись в строку файла лога: "<timestamp>: <message>".

    По умолчанию error и stack_trace в строку не попадают.
    С include_error=True ошибка дописывается после сообщения,
    а stack trace идет следующими строками.
    """
    line = f"{format_timestamp(record.timestamp)}: {record.message}"
    if not include_error:
        return line

    if record.error is not None:
        line += f" | error: {_format_error(record.error)}"
    if record.stack_trace is not None:
        line += "\n" + _format_stack_trace(record.stack_trace)
    return line
