from pathlib import Path
import itertools
import threading


RESOLVE_TIMEOUT_SEC = 5.0

_names = itertools.count()


def unique_app_name() -> str:
    return f"test_logger_{next(_names)}"


def read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


class CountingResolver:
    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.calls = 0

    def resolve(self) -> Path:
        self.calls += 1
        return self.directory


class BlockingResolver:
    """Возвращает директорию только после release.set()."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.release = threading.Event()

    def resolve(self) -> Path:
        self.release.wait(RESOLVE_TIMEOUT_SEC)
        return self.directory


class FailingResolver:
    def resolve(self) -> Path:
        raise PermissionError("documents directory is not accessible")


class FlakyResolver:
    """Первый вызов падает с произвольным исключением, дальше возвращает директорию."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.calls = 0

    def resolve(self) -> Path:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("platform API is not ready")
        return self.directory
