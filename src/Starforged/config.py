"""Settings loader for Starforged.

`discord_token` and `require_token` are the hook for a network chat transport.
The console CLI runs without a token; a transport that connects to a chat
service calls `require_token` at startup and refuses to start without one.
"""

from pathlib import Path
from typing import Any

import tomllib
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

TOKEN_ENVVAR = "STARFORGED_DISCORD_TOKEN"
MISSING_TOKEN_ERROR = f"Missing {TOKEN_ENVVAR} environment variable"


class MissingTokenError(RuntimeError):
    pass


def _toml_settings_source() -> dict[str, Any]:
    """Load settings from config.toml with keys mapped to Settings fields.

    This source has LOWER priority than env/.env so those can override TOML.
    """
    cfg_path = Path("config.toml")
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        t = tomllib.load(f)
    bot_cfg = t.get("bot", {}) or {}
    log_cfg = t.get("logging", {}) or {}
    out: dict[str, Any] = {}
    for key in ("command_prefix", "delete_trigger_messages", "emphasize_replies",
                "max_message_length", "rng_seed"):
        if key in bot_cfg:
            out[key] = bot_cfg[key]

    overall = str(log_cfg.get("level", "INFO")).upper()
    out["logging_level"] = overall

    # Per-handler levels: strings INFO|DEBUG|WARNING|ERROR|CRITICAL|NONE
    # Booleans map True->overall level, False->NONE
    def _norm_level(v, default):
        if isinstance(v, str):
            return v.upper()
        if isinstance(v, bool):
            return default if v else "NONE"
        return default

    out["logging_console"] = _norm_level(log_cfg.get("console"), overall)
    file_val = log_cfg.get("to_file")
    out["logging_file"] = "NONE" if file_val is None else _norm_level(file_val, overall)
    if "file_path" in log_cfg:
        out["logging_file_path"] = log_cfg["file_path"]
    if "max_bytes" in log_cfg:
        out["logging_max_bytes"] = int(log_cfg["max_bytes"])
    if "backup_count" in log_cfg:
        out["logging_backup_count"] = int(log_cfg["backup_count"])
    return out


class Settings(BaseSettings):
    env: str = Field(default="dev")

    # --- Chat transport ---
    command_prefix: str = Field(default="/", min_length=1)
    discord_token: SecretStr | None = None

    # --- Bot behavior ---
    delete_trigger_messages: bool = True
    # Wrap roll replies in ***...*** (bold italics in chat markdown)
    emphasize_replies: bool = True
    max_message_length: int = Field(default=200, ge=1)
    # Fixed seed for reproducible local sessions; None uses the shared generator
    rng_seed: int | None = None

    # --- Logging ---
    logging_level: str = "INFO"
    logging_console: str = "INFO"
    # File logging is opt-in for a chat bot
    logging_file: str = "NONE"
    logging_file_path: str = "logs/starforged.jsonl"
    logging_max_bytes: int = 5_000_000
    logging_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_prefix="STARFORGED_",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Precedence (highest to lowest):
        # 1) init_settings (explicit overrides in code/tests)
        # 2) dotenv (.env in cwd)
        # 3) env_settings (OS env)
        # 4) TOML (config.toml)
        # 5) file_secret_settings
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            _toml_settings_source,
            file_secret_settings,
        )


def load_settings() -> Settings:
    return Settings()


def require_token(settings: Settings) -> str:
    """Return the chat token, or raise if a network transport can't start without it."""
    if settings.discord_token is None or not settings.discord_token.get_secret_value():
        raise MissingTokenError(MISSING_TOKEN_ERROR)
    return settings.discord_token.get_secret_value()
