"""Общий lazy-логгер: создается при первом get_instance(), файл log_lazy.txt."""

from singleton_logger.file_logger import FileLogger
from singleton_logger.policy import InitPolicy
from singleton_logger.singleton import SingletonHolder


holder = SingletonHolder.for_policy(InitPolicy.LAZY)


def get_instance() -> FileLogger:
    return holder.get_instance()
