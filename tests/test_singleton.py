from threading import Barrier, Lock, Thread
import importlib
import sys

import pytest

from singleton_logger import FileLogger, InitPolicy, LoggerSettings, SingletonHolder

from helpers import RESOLVE_TIMEOUT_SEC, CountingResolver, unique_app_name


class CountingFactory:
    def __init__(self, directory):
        self.directory = directory
        self.created: list[FileLogger] = []
        self._lock = Lock()

    def __call__(self, settings: LoggerSettings) -> FileLogger:
        logger = FileLogger(settings, resolver=CountingResolver(self.directory))
        with self._lock:
            self.created.append(logger)
        return logger

    def close_all(self):
        for logger in self.created:
            logger.close(RESOLVE_TIMEOUT_SEC)


@pytest.fixture
def factory(tmp_path):
    factory = CountingFactory(tmp_path)
    yield factory
    factory.close_all()


def make_holder(policy, factory, **overrides):
    settings = LoggerSettings.for_policy(policy, app_name=unique_app_name(), **overrides)
    return SingletonHolder(settings, factory=factory)


@pytest.mark.parametrize("policy", [InitPolicy.EAGER, InitPolicy.LAZY])
def test_sequential_calls_return_same_instance(policy, factory):
    holder = make_holder(policy, factory)
    first = holder.get_instance()
    assert all(holder.get_instance() is first for _ in range(50))
    assert len(factory.created) == 1


def test_eager_instance_exists_before_first_call(factory):
    holder = make_holder(InitPolicy.EAGER, factory)
    assert holder.peek() is not None
    assert len(factory.created) == 1
    assert holder.get_instance() is holder.peek()


def test_lazy_instance_created_on_first_call(factory):
    holder = make_holder(InitPolicy.LAZY, factory)
    assert holder.peek() is None
    assert factory.created == []

    instance = holder.get_instance()
    assert holder.peek() is instance
    assert factory.created == [instance]


def test_concurrent_first_calls_create_one_instance(factory):
    holder = make_holder(InitPolicy.LAZY, factory)
    workers = 16
    barrier = Barrier(workers)
    seen = []
    seen_lock = Lock()

    def worker():
        barrier.wait()
        instance = holder.get_instance()
        with seen_lock:
            seen.append(instance)

    threads = [Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(RESOLVE_TIMEOUT_SEC)

    assert len(seen) == workers
    assert all(instance is seen[0] for instance in seen)
    assert len(factory.created) == 1


def test_reset_lazy_forgets_instance(factory):
    holder = make_holder(InitPolicy.LAZY, factory)
    first = holder.get_instance()

    holder.reset(RESOLVE_TIMEOUT_SEC)

    assert holder.peek() is None
    assert first.dispatcher.subscriber_count == 0
    assert holder.get_instance() is not first


def test_reset_eager_recreates_instance(factory):
    holder = make_holder(InitPolicy.EAGER, factory)
    first = holder.peek()

    holder.reset(RESOLVE_TIMEOUT_SEC)

    assert holder.peek() is not None
    assert holder.peek() is not first


def test_holder_defaults_per_policy():
    holder = SingletonHolder.for_policy(InitPolicy.LAZY)
    assert holder.policy is InitPolicy.LAZY
    assert holder.settings.file_name == "log_lazy.txt"
    assert holder.settings.app_name == "singleton_pattern_example_lazy"
    assert holder.peek() is None


def test_holder_from_config(tmp_path, factory):
    config_path = tmp_path / "logger.yaml"
    config_path.write_text(
        f"policy: lazy\napp_name: {unique_app_name()}\nfile_name: custom.txt\ndirectory: {tmp_path}\n",
        encoding="utf-8",
    )
    holder = SingletonHolder.from_config(config_path, factory=factory)

    logger = holder.get_instance()
    logger.log("configured")
    assert logger.flush(RESOLVE_TIMEOUT_SEC)
    assert (tmp_path / "custom.txt").read_text(encoding="utf-8").endswith(": configured\n")


def test_shared_lazy_module_returns_one_instance():
    lazy = importlib.import_module("singleton_logger.lazy")
    instance = lazy.get_instance()
    assert lazy.get_instance() is instance
    assert lazy.holder.policy is InitPolicy.LAZY
    assert instance.file_name == "log_lazy.txt"


@pytest.mark.skipif(sys.platform == "win32", reason="documents directory comes from the registry")
def test_shared_eager_module_creates_instance_on_import(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setenv("XDG_DOCUMENTS_DIR", str(tmp_path / "Documents"))
    monkeypatch.delitem(sys.modules, "singleton_logger.eager", raising=False)

    eager = importlib.import_module("singleton_logger.eager")
    try:
        instance = eager.holder.peek()
        assert instance is not None
        assert eager.get_instance() is instance
        assert instance.wait_until_resolved(RESOLVE_TIMEOUT_SEC)
        assert instance.target_path.name == "log_eager.txt"
    finally:
        eager.get_instance().close(RESOLVE_TIMEOUT_SEC)
