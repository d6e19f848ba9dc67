from pathlib import Path
from typing import Protocol
import logging

from platformdirs import user_documents_dir

from singleton_logger.errors import ResolutionError


_log = logging.getLogger(__name__)


class DirectoryResolver(Protocol):
    def resolve(self) -> Path: ...


class DocumentsDirectoryResolver:
    """Документы текущего пользователя, как их определяет platformdirs."""

    def resolve(self) -> Path:
        try:
            directory = Path(user_documents_dir())
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as ex:
            raise ResolutionError("Cannot resolve documents directory") from ex
        _log.debug("Resolved documents directory: %s", directory)
        return directory


class StaticDirectoryResolver:
    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def resolve(self) -> Path:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as ex:
            raise ResolutionError(f"Cannot create log directory: {self.directory}") from ex
        return self.directory
