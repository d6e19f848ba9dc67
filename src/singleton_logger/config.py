from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import yaml

from singleton_logger.policy import InitPolicy


APP_NAME_PREFIX = "singleton_pattern_example"


def _get_flag(config: "Config", key: str) -> bool:
    value = config.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


class Config:
    """
    Поддерживается только простейший YAML.
    Иммутабельный класс - после создания конфиг нельзя изменять.
    """
    __slots__ = ('_data',)

    def __init__(self, data: Optional[dict[str, Any]] = None):
        object.__setattr__(self, '_data', data if data is not None else {})

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Config is immutable. Cannot set attribute '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Config is immutable. Cannot delete attribute '{name}'")

    def get(self, key: str, default: Any = None) -> Any:
        keys = key.split('.')
        cur_value = self._data

        for cur_key in keys:
            if not isinstance(cur_value, dict) or cur_key not in cur_value:
                return default
            cur_value = cur_value[cur_key]

        if isinstance(cur_value, dict):
            return Config(cur_value)
        return cur_value

    def __getattr__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise AttributeError(f"Config has no attribute '{key}'")
        return value

    def to_dict(self) -> dict[str, Any]:
        def convert(value: Any) -> Any:
            if isinstance(value, Config):
                return {k: convert(v) for k, v in value._data.items()}
            elif isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [convert(item) for item in value]
            elif isinstance(value, Path):
                return str(value)
            return value
        return convert(self._data)

    def save(self, path: Path) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def load_config(config_path: str | Path) -> Config:
    config_path = Path(config_path)

    if not config_path.suffix:
        config_path = config_path.with_suffix('.yaml')
    elif config_path.suffix not in ('.yaml', '.yml'):
        config_path = config_path.with_suffix('.yaml')

    config_path = config_path.resolve()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")

    return Config(config_data)


@dataclass(frozen=True)
class LoggerSettings:
    policy: InitPolicy
    app_name: str
    file_name: str
    directory: Optional[Path] = None
    include_error: bool = False
    wait_for_resolution: bool = False
    strict: bool = False
    queue_maxsize: int = 0

    @classmethod
    def for_policy(cls, policy: InitPolicy, **overrides: Any) -> "LoggerSettings":
        defaults = {
            "app_name": f"{APP_NAME_PREFIX}_{policy.value}",
            "file_name": f"log_{policy.value}.txt",
        }
        defaults.update(overrides)
        return cls(policy=policy, **defaults)

    @classmethod
    def from_config(cls, config: Config) -> "LoggerSettings":
        """
        Собирает настройки из конфига. Отсутствующие ключи
        берутся по умолчанию для указанной политики (lazy, если не задана).
        """
        policy = InitPolicy.from_str(config.get("policy", InitPolicy.LAZY.value))
        directory = config.get("directory")
        queue_maxsize = int(config.get("queue_maxsize", 0))
        if queue_maxsize < 0:
            raise ValueError(f"queue_maxsize must be >= 0, got {queue_maxsize}")

        defaults = cls.for_policy(policy)
        return cls(
            policy=policy,
            app_name=config.get("app_name", defaults.app_name),
            file_name=config.get("file_name", defaults.file_name),
            directory=Path(directory) if directory else None,
            include_error=_get_flag(config, "include_error"),
            wait_for_resolution=_get_flag(config, "wait_for_resolution"),
            strict=_get_flag(config, "strict"),
            queue_maxsize=queue_maxsize,
        )

    def to_config(self) -> Config:
        return Config({
            "policy": self.policy.value,
            "app_name": self.app_name,
            "file_name": self.file_name,
            "directory": self.directory,
            "include_error": self.include_error,
            "wait_for_resolution": self.wait_for_resolution,
            "strict": self.strict,
            "queue_maxsize": self.queue_maxsize,
        })


def load_settings(config_path: str | Path) -> LoggerSettings:
    return LoggerSettings.from_config(load_config(config_path))
