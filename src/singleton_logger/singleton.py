from pathlib import Path
from threading import Lock
from typing import Callable, Optional

from singleton_logger.config import LoggerSettings, load_settings
from singleton_logger.file_logger import FileLogger
from singleton_logger.policy import InitPolicy


LoggerFactory = Callable[[LoggerSettings], FileLogger]


class SingletonHolder:
    """
    Хранит единственный FileLogger.

    EAGER - экземпляр создается в конструкторе холдера.
    LAZY - при первом get_instance(), под блокировкой.
    """

    def __init__(self, settings: LoggerSettings, factory: Optional[LoggerFactory] = None):
        self.settings = settings
        self._factory: LoggerFactory = factory if factory is not None else FileLogger
        self._instance: Optional[FileLogger] = None
        self._lock = Lock()

        if self.policy is InitPolicy.EAGER:
            self._instance = self._factory(settings)

    @classmethod
    def for_policy(cls, policy: InitPolicy, factory: Optional[LoggerFactory] = None) -> "SingletonHolder":
        return cls(LoggerSettings.for_policy(policy), factory=factory)

    @classmethod
    def from_config(cls, config_path: str | Path, factory: Optional[LoggerFactory] = None) -> "SingletonHolder":
        return cls(load_settings(config_path), factory=factory)

    @property
    def policy(self) -> InitPolicy:
        return self.settings.policy

    def get_instance(self) -> FileLogger:
        instance = self._instance
        if instance is not None:
            return instance
        with self._lock:
            if self._instance is None:
                self._instance = self._factory(self.settings)
            return self._instance

    def peek(self) -> Optional[FileLogger]:
        return self._instance

    def reset(self, timeout: Optional[float] = None) -> None:
        """Закрывает текущий экземпляр. EAGER сразу создает новый."""
        with self._lock:
            instance, self._instance = self._instance, None
            if instance is not None:
                instance.close(timeout)
            if self.policy is InitPolicy.EAGER:
                self._instance = self._factory(self.settings)
