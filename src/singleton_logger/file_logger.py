from pathlib import Path
from threading import Event, Lock, Thread
from typing import Any, Optional, Protocol
import asyncio
import logging

from singleton_logger.config import LoggerSettings
from singleton_logger.dispatcher import RecordDispatcher
from singleton_logger.errors import LoggerError, PreconditionError, ResolutionError
from singleton_logger.policy import InitPolicy
from singleton_logger.record import LogRecord, format_record
from singleton_logger.resolver import (
    DirectoryResolver,
    DocumentsDirectoryResolver,
    StaticDirectoryResolver,
)
from singleton_logger.writer import ErrorCallback, QueuedFileWriter


_log = logging.getLogger(__name__)


class Logger(Protocol):
    def log(
        self,
        message: Any,
        error: Optional[Any] = None,
        stack_trace: Optional[Any] = None,
    ) -> None: ...


def make_resolver(settings: LoggerSettings) -> DirectoryResolver:
    if settings.directory is not None:
        return StaticDirectoryResolver(settings.directory)
    return DocumentsDirectoryResolver()


def report_error(error: LoggerError, line: Optional[str]) -> None:
    if line is None:
        _log.warning("Log file resolution failed: %s", error)
    else:
        _log.warning("Dropped log line %r: %s", line, error)


class FileLogger:
    """
    Логгер, дописывающий строки "<timestamp>: <message>" в файл.

    Политика инициализации определяет, когда определяется путь к файлу:
      - EAGER: один раз, в фоновом потоке, запущенном из конструктора.
        Записи, обработанные до завершения, падают с PreconditionError
        (если не включен wait_for_resolution).
      - LAZY: заново перед каждой записью.

    log() никогда не ждет записи и не пробрасывает ошибки вызывающему.
    """

    def __init__(
        self,
        settings: LoggerSettings,
        resolver: Optional[DirectoryResolver] = None,
        dispatcher: Optional[RecordDispatcher] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.settings = settings
        self.policy = settings.policy
        self.file_name = settings.file_name

        self._resolver = resolver if resolver is not None else make_resolver(settings)
        self._dispatcher = dispatcher if dispatcher is not None else RecordDispatcher(settings.app_name)
        self._on_error = on_error if on_error is not None else report_error

        self._target_path: Optional[Path] = None
        self._lock = Lock()
        self._resolved = Event()
        self._precondition_errors: list[PreconditionError] = []

        self._writer = QueuedFileWriter(
            target=self._current_target,
            on_error=self._handle_error,
            maxsize=settings.queue_maxsize,
            name=f"{settings.app_name}-writer",
        )
        self._dispatcher.subscribe(self._handle_record)
        _log.debug("%s logger initialized: %s", self.policy.value.capitalize(), settings.app_name)

        self._resolve_thread: Optional[Thread] = None
        if self.policy is InitPolicy.EAGER:
            self._resolve_thread = Thread(
                target=self._resolve_once,
                name=f"{settings.app_name}-resolve",
                daemon=True,
            )
            self._resolve_thread.start()

    @property
    def target_path(self) -> Optional[Path]:
        return self._target_path

    @property
    def resolved(self) -> bool:
        return self._target_path is not None

    @property
    def dispatcher(self) -> RecordDispatcher:
        return self._dispatcher

    def wait_until_resolved(self, timeout: Optional[float] = None) -> bool:
        """Ждет завершения хотя бы одной попытки определить путь."""
        return self._resolved.wait(timeout)

    def log(
        self,
        message: Any,
        error: Optional[Any] = None,
        stack_trace: Optional[Any] = None,
    ) -> None:
        self._dispatcher.publish(message, error, stack_trace)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Ждет записи всех строк, залогированных до вызова.

        В strict-режиме пробрасывает первую накопленную PreconditionError.
        """
        done = self._writer.flush(timeout)
        if self.settings.strict:
            with self._lock:
                errors, self._precondition_errors = self._precondition_errors, []
            if errors:
                raise errors[0]
        return done

    async def aflush(self, timeout: Optional[float] = None) -> bool:
        return await asyncio.to_thread(self.flush, timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        self._dispatcher.unsubscribe(self._handle_record)
        self._writer.close(timeout)

    def _resolve_target(self) -> Path:
        try:
            return Path(self._resolver.resolve()) / self.file_name
        except ResolutionError:
            raise
        except Exception as ex:
            raise ResolutionError(f"Cannot resolve log directory for '{self.settings.app_name}'") from ex

    def _set_target_path(self, path: Path) -> None:
        with self._lock:
            if self._target_path is not None:
                raise RuntimeError(f"Target path is already set: {self._target_path}")
            self._target_path = path

    def _resolve_once(self) -> None:
        try:
            path = self._resolve_target()
        except LoggerError as ex:
            self._handle_error(ex, None)
        else:
            self._set_target_path(path)
            _log.debug("Log file resolved: %s", path)
        finally:
            self._resolved.set()

    def _current_target(self) -> Path:
        if self.policy is InitPolicy.LAZY:
            path = self._resolve_target()
            self._target_path = path
            self._resolved.set()
            return path

        if self.settings.wait_for_resolution:
            self._resolved.wait()
        if self._target_path is None:
            raise PreconditionError(
                f"Log file for '{self.settings.app_name}' is not resolved yet"
            )
        return self._target_path

    def _handle_record(self, record: LogRecord) -> None:
        line = format_record(record, include_error=self.settings.include_error)
        self._writer.submit(line)

    def _handle_error(self, error: LoggerError, line: Optional[str]) -> None:
        if self.settings.strict and isinstance(error, PreconditionError):
            with self._lock:
                self._precondition_errors.append(error)
        self._on_error(error, line)
