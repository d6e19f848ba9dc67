from enum import Enum


class InitPolicy(Enum):
    EAGER = "eager"
    LAZY = "lazy"

    @classmethod
    def from_str(cls, value: str) -> "InitPolicy":
        """
        Создает политику из строки конфига.

        Raises:
            ValueError: Если значение не поддерживается
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown {cls.__name__}: '{value}'. "
                f"Supported values: {[p.value for p in cls]}"
            )
