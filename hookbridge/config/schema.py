"""Pydantic models for HookBridge configuration validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiscordConfig(BaseModel):
    """Discord application settings.

    Secrets are never stored in the config file. The file only names the
    environment variables that hold them.
    """

    model_config = ConfigDict(extra="forbid")

    token_env: str = "DISCORD_TOKEN"
    """Environment variable containing the bot token."""

    application_id_env: str = "CLIENT_ID"
    """Environment variable containing the application (client) ID."""

    api_base: str = "https://discord.com/api/v10"
    """Base URL for Discord REST calls (command registration)."""


class WebhookConfig(BaseModel):
    """Outbound webhook call settings."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=840.0, gt=0)
    """Seconds to wait for a webhook before reporting a transport failure.

    Kept below the 15 minute lifetime of a Discord interaction token so the
    failure can still be reported by editing the original reply.
    """

    failure_keywords: list[str] = Field(
        default_factory=lambda: ["error", "failed", "not found"]
    )
    """Case-insensitive substrings that mark a webhook message as a failure."""

    @field_validator("failure_keywords")
    @classmethod
    def validate_failure_keywords(cls, v: list[str]) -> list[str]:
        """Reject empty keyword lists and blank keywords."""
        if not v:
            raise ValueError("failure_keywords must contain at least one keyword")
        cleaned = [k.strip().lower() for k in v]
        if any(not k for k in cleaned):
            raise ValueError("failure_keywords must not contain blank entries")
        return cleaned


class TableConfig(BaseModel):
    """A table that can be targeted by the ``update`` command.

    Example in config.json:
        "tables": {
            "tf2_rgl_seasons": {
                "label": "TF2 RGL Seasons",
                "webhook_url_env": "WEBHOOK_RGL_SEASONS"
            }
        }
    """

    model_config = ConfigDict(extra="forbid")

    label: str
    """Human-readable choice name shown in the slash command picker."""

    webhook_url_env: str | None = None
    """Environment variable containing the webhook URL."""

    webhook_url: str | None = None
    """Literal webhook URL. Takes precedence over webhook_url_env when set."""


class Config(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    discord: DiscordConfig = DiscordConfig()
    webhook: WebhookConfig = WebhookConfig()
    tables: dict[str, TableConfig] = {}

    @field_validator("tables")
    @classmethod
    def validate_table_keys(cls, v: dict[str, TableConfig]) -> dict[str, TableConfig]:
        """Table keys are sent as choice values, so they must be non-empty."""
        for key in v:
            if not key.strip():
                raise ValueError("table keys must be non-empty strings")
        return v
