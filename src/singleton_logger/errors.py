class LoggerError(Exception):
    """Базовая ошибка пути записи логгера."""


class ResolutionError(LoggerError):
    """Не удалось определить директорию для файла лога."""


class WriteError(LoggerError):
    """Не удалось открыть файл лога или дописать в него строку."""


class PreconditionError(LoggerError):
    """Запись в файл, путь к которому ещё не определён."""
