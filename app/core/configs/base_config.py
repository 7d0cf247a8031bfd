from typing import Any, ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base settings loaded from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True,
    )

    # Field names whose values must never be printed
    _default_secrets: ClassVar[list[str]] = []

    @staticmethod
    def _parse_list(value: Any) -> Any:
        """Accept comma-separated strings for list fields."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(',') if item.strip()]
        return value

    def __repr_args__(self):  # type: ignore[override]
        for name, value in super().__repr_args__():
            if name in self._default_secrets and value:
                yield name, '***'
            else:
                yield name, value
