import pytest

from singleton_logger import FileLogger, InitPolicy, LoggerSettings

from helpers import RESOLVE_TIMEOUT_SEC, BlockingResolver, unique_app_name


@pytest.fixture
def errors():
    return []


@pytest.fixture
def make_logger(tmp_path, errors):
    created: list[FileLogger] = []
    blocking: list[BlockingResolver] = []

    def factory(policy: InitPolicy = InitPolicy.LAZY, resolver=None, **overrides) -> FileLogger:
        overrides.setdefault("app_name", unique_app_name())
        overrides.setdefault("directory", tmp_path)
        settings = LoggerSettings.for_policy(policy, **overrides)
        if isinstance(resolver, BlockingResolver):
            blocking.append(resolver)
        logger = FileLogger(
            settings,
            resolver=resolver,
            on_error=lambda error, line: errors.append((error, line)),
        )
        created.append(logger)
        return logger

    yield factory

    for resolver in blocking:
        resolver.release.set()
    for logger in created:
        logger.close(timeout=RESOLVE_TIMEOUT_SEC)
