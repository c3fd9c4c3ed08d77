from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    timeline_pad_days: int = Field(
        default=7,
        ge=0,
        validation_alias="TIMELINE_PAD_DAYS",
        description="Days shown before the first block and after the last block",
    )
    timeline_horizon_before_days: int = Field(
        default=7,
        ge=0,
        validation_alias="TIMELINE_HORIZON_BEFORE_DAYS",
        description="Days before today shown when an athlete has no blocks",
    )
    timeline_horizon_after_days: int = Field(
        default=45,
        ge=0,
        validation_alias="TIMELINE_HORIZON_AFTER_DAYS",
        description="Days after today shown when an athlete has no blocks",
    )
    week_starts_on: int = Field(
        default=0,
        ge=0,
        le=6,
        validation_alias="WEEK_STARTS_ON",
        description="First day of the week (0=Monday ... 6=Sunday)",
    )
    urgency_this_week_days: int = Field(
        default=7,
        ge=1,
        validation_alias="URGENCY_THIS_WEEK_DAYS",
        description="Largest day difference still classified as thisWeek",
    )
    block_end_action_days: int = Field(
        default=3,
        ge=0,
        validation_alias="BLOCK_END_ACTION_DAYS",
        description="Days before the current block ends at which it needs action",
    )
    pacing_warning_days: int = Field(
        default=3,
        ge=0,
        validation_alias="PACING_WARNING_DAYS",
        description="Days without a submission before the athlete is flagged as off-pace",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
