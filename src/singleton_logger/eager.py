"""Общий eager-логгер: создается при импорте модуля, файл log_eager.txt."""

from singleton_logger.file_logger import FileLogger
from singleton_logger.policy import InitPolicy
from singleton_logger.singleton import SingletonHolder


holder = SingletonHolder.for_policy(InitPolicy.EAGER)


def get_instance() -> FileLogger:
    return holder.get_instance()
