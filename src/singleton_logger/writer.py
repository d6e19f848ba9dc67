from pathlib import Path
from queue import Queue, Full
from threading import Event, Thread
from typing import Callable, Optional
import logging

from singleton_logger.errors import LoggerError, WriteError


_log = logging.getLogger(__name__)

_STOP = object()

ErrorCallback = Callable[[LoggerError, Optional[str]], None]


def append_line(path: str | Path, line: str) -> None:
    """Дописывает строку в конец файла. Файл создается, если его нет."""
    try:
        with open(path, 'a', encoding='utf-8') as f:
            f.write(line + "\n")
    except (OSError, ValueError) as ex:
        raise WriteError(f"Cannot append to log file: {path}") from ex


class QueuedFileWriter:
    """
    Все записи идут через одну очередь и один поток,
    поэтому порядок строк в файле совпадает с порядком submit.

    target вызывается перед каждой записью и возвращает путь к файлу.
    Ошибки LoggerError передаются в on_error и не повторяются.
    """

    def __init__(
        self,
        target: Callable[[], Path],
        on_error: ErrorCallback,
        maxsize: int = 0,
        name: str = "file-writer",
    ):
        self._target = target
        self._on_error = on_error
        self._queue: Queue = Queue(maxsize=maxsize)
        self._closed = False

        self._thread = Thread(target=self._worker, name=name, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, line: str) -> bool:
        if self._closed:
            return False
        try:
            self._queue.put_nowait(line)
        except Full:
            _log.warning("Log queue is full, dropping line: %r", line)
            return False
        return True

    def _write(self, line: str) -> None:
        append_line(self._target(), line)

    def _report(self, error: LoggerError, line: str) -> None:
        try:
            self._on_error(error, line)
        except Exception:
            _log.exception("Error callback failed for line %r", line)

    def _worker(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    break
                if isinstance(item, Event):
                    item.set()
                    continue
                try:
                    self._write(item)
                except LoggerError as ex:
                    self._report(ex, item)
                except Exception as ex:
                    _log.exception("Unexpected failure writing line %r", item)
                    error = WriteError(f"Unexpected failure writing log line: {ex!r}")
                    error.__cause__ = ex
                    self._report(error, item)
            finally:
                self._queue.task_done()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Ждет, пока будут обработаны все строки, поставленные до вызова.

        Returns:
            False, если не дождались за timeout.
        """
        if self._closed:
            return not self._thread.is_alive()
        marker = Event()
        try:
            self._queue.put(marker, timeout=timeout)
        except Full:
            return False
        return marker.wait(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put(_STOP, timeout=timeout)
        except Full:
            _log.warning("Log queue is still full, writer thread left running")
            return
        self._thread.join(timeout)
