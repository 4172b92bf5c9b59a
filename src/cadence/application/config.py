from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cadence.application.queue_builder import StudyLimits
from cadence.application.scheduling.steps import settings_from_step_string
from cadence.domain.constants import (
    DEFAULT_EASY_BONUS,
    DEFAULT_GRADUATING_INTERVAL_DAYS,
    DEFAULT_HARD_INTERVAL,
    DEFAULT_MAX_REVIEWS_PER_DAY,
    DEFAULT_NEW_CARDS_PER_DAY,
    DEFAULT_STARTING_EASE,
    MAX_EASE,
    MIN_EASE,
)
from cadence.domain.scheduling.models import SchedulerSettings


def _config_files() -> list[Path]:
    return [
        Path.home() / ".config/cadence/config.toml",
        Path.home() / ".cadence.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for cadence.
    Supports loading from:
    1. Environment variables (CADENCE_*)
    2. Config file (~/.config/cadence/config.toml or ~/.cadence.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        extra="ignore",
    )

    # Scheduler
    learning_steps: str = "1m"
    starting_ease: float = DEFAULT_STARTING_EASE
    easy_bonus: float = DEFAULT_EASY_BONUS
    hard_interval: float = DEFAULT_HARD_INTERVAL
    graduating_interval_days: int = DEFAULT_GRADUATING_INTERVAL_DAYS

    # Study queue
    new_cards_per_day: int = DEFAULT_NEW_CARDS_PER_DAY
    max_reviews_per_day: int = DEFAULT_MAX_REVIEWS_PER_DAY
    review_order: Literal["reviewsFirst", "newFirst", "mixed"] = "reviewsFirst"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in _config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("starting_ease")
    @classmethod
    def check_starting_ease(cls, v: float) -> float:
        if not MIN_EASE <= v <= MAX_EASE:
            raise ValueError(f"starting_ease must be between {MIN_EASE} and {MAX_EASE}")
        return v

    @field_validator("easy_bonus", "hard_interval")
    @classmethod
    def check_positive_factor(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("interval factors must be positive")
        return v

    @field_validator("graduating_interval_days")
    @classmethod
    def check_graduating_interval(cls, v: int) -> int:
        if v < 1:
            raise ValueError("graduating_interval_days must be at least 1")
        return v

    @field_validator("new_cards_per_day", "max_reviews_per_day")
    @classmethod
    def check_daily_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("daily limits cannot be negative")
        return v

    def scheduler_settings(self) -> SchedulerSettings:
        """Project onto the scheduler's settings; parses the step string once."""
        return settings_from_step_string(
            self.learning_steps,
            starting_ease=self.starting_ease,
            easy_bonus=self.easy_bonus,
            hard_interval=self.hard_interval,
            graduating_interval_days=self.graduating_interval_days,
        )

    def study_limits(self) -> StudyLimits:
        return StudyLimits(
            new_cards_per_day=self.new_cards_per_day,
            max_reviews_per_day=self.max_reviews_per_day,
            review_order=self.review_order,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/cadence/config.toml (if exists)
    3. Environment variables (CADENCE_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
