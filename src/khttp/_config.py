import logging
import os

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """Library-wide defaults, applied only where an options record is silent."""

    model_config = ConfigDict(validate_assignment=True)

    default_encoding: str = "utf-8"
    default_timeout: float = 0
    # diagnostic override for tests, never enable in normal operation
    allow_duplicate_callbacks: bool = False

    @field_validator("default_timeout")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        return max(value, 0)

    @classmethod
    def from_env(cls) -> "Config":
        from khttp._utils.constants import (
            ENV_ALLOW_DUPLICATE_CALLBACKS,
            ENV_DEFAULT_ENCODING,
            ENV_DEFAULT_TIMEOUT,
        )

        values = {
            "default_encoding": os.getenv(ENV_DEFAULT_ENCODING),
            "default_timeout": os.getenv(ENV_DEFAULT_TIMEOUT),
            "allow_duplicate_callbacks": os.getenv(ENV_ALLOW_DUPLICATE_CALLBACKS),
        }
        values = {key: value for key, value in values.items() if value}
        try:
            return cls(**values)
        except ValidationError as e:
            invalid = {f"{error['loc'][0]}" for error in e.errors()}
            logger.warning(
                f"Ignoring invalid khttp settings from the environment: {', '.join(sorted(invalid))}"
            )
            return cls(**{key: value for key, value in values.items() if key not in invalid})

    def refresh_from_env(self) -> None:
        """Re-read the environment, e.g. after a .env file was loaded."""
        fresh = self.from_env()
        for name in fresh.model_fields_set:
            setattr(self, name, getattr(fresh, name))


config = Config.from_env()
