"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC offset) used to count calendar days",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from the dashboard client",
    )

    notification_task_lead_days: int = Field(default=1, ge=0)
    notification_task_high_overdue_days: int = Field(default=0, ge=0)
    notification_task_urgent_overdue_days: int = Field(default=5, ge=0)
    notification_task_escalation_overdue_days: int = Field(default=14, ge=0)
    notification_renewal_lead_days: int = Field(default=30, ge=0)
    notification_renewal_high_days: int = Field(default=7, ge=0)
    notification_renewal_urgent_days: int = Field(default=1, ge=0)
    notification_renewal_escalation_overdue_days: int = Field(default=7, ge=0)
    notification_partner_stall_days: int = Field(default=7, ge=0)
    notification_partner_agreement_grace_days: int = Field(default=14, ge=0)
    notification_partner_escalation_stall_days: int = Field(default=30, ge=0)
    notification_customer_recent_inactive_days: int = Field(default=30, ge=0)
    notification_customer_high_value_threshold: float = Field(default=30000, ge=0)
    notification_elevated_roles: list[str] = Field(
        default_factory=lambda: ["admin", "manager"],
        description="Roles that see every entity and receive system digests",
    )
    notification_restricted_roles: list[str] = Field(
        default_factory=lambda: ["fsr", "bde"],
        description="Roles for which partner onboarding notifications are suppressed",
    )

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "Settings":
        if self.notification_task_urgent_overdue_days < self.notification_task_high_overdue_days:
            raise ValueError(
                "NOTIFICATION_TASK_URGENT_OVERDUE_DAYS must not be lower than "
                "NOTIFICATION_TASK_HIGH_OVERDUE_DAYS"
            )
        if self.notification_renewal_urgent_days > self.notification_renewal_high_days:
            raise ValueError(
                "NOTIFICATION_RENEWAL_URGENT_DAYS must not exceed NOTIFICATION_RENEWAL_HIGH_DAYS"
            )
        overlap = {role.lower() for role in self.notification_elevated_roles} & {
            role.lower() for role in self.notification_restricted_roles
        }
        if overlap:
            raise ValueError(
                f"Roles cannot be both elevated and restricted: {', '.join(sorted(overlap))}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
