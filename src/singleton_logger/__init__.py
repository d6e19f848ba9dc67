from singleton_logger.config import Config, LoggerSettings, load_config, load_settings
from singleton_logger.dispatcher import RecordDispatcher
from singleton_logger.errors import (
    LoggerError,
    PreconditionError,
    ResolutionError,
    WriteError,
)
from singleton_logger.file_logger import FileLogger, Logger
from singleton_logger.policy import InitPolicy
from singleton_logger.record import LogRecord, format_record
from singleton_logger.resolver import (
    DirectoryResolver,
    DocumentsDirectoryResolver,
    StaticDirectoryResolver,
)
from singleton_logger.singleton import SingletonHolder
from singleton_logger.writer import QueuedFileWriter, append_line

__all__ = [
    'Config',
    'LoggerSettings',
    'load_config',
    'load_settings',
    'RecordDispatcher',
    'LoggerError',
    'PreconditionError',
    'ResolutionError',
    'WriteError',
    'FileLogger',
    'Logger',
    'InitPolicy',
    'LogRecord',
    'format_record',
    'DirectoryResolver',
    'DocumentsDirectoryResolver',
    'StaticDirectoryResolver',
    'SingletonHolder',
    'QueuedFileWriter',
    'append_line',
]
