import pytest
from pydantic import SecretStr

from Starforged.config import MISSING_TOKEN_ERROR, MissingTokenError, Settings, load_settings, require_token
from Starforged.logging import redact_settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # No config.toml or .env from the repo, no STARFORGED_* from the shell
    monkeypatch.chdir(tmp_path)
    import os

    for key in list(os.environ):
        if key.upper().startswith("STARFORGED_"):
            monkeypatch.delenv(key)
    return tmp_path


def test_defaults(clean_env):
    s = load_settings()
    assert s.command_prefix == "/"
    assert s.discord_token is None
    assert s.delete_trigger_messages is True
    assert s.emphasize_replies is True
    assert s.logging_file == "NONE"


def test_env_prefix(clean_env, monkeypatch):
    monkeypatch.setenv("STARFORGED_COMMAND_PREFIX", "!")
    monkeypatch.setenv("STARFORGED_DISCORD_TOKEN", "abc123")
    monkeypatch.setenv("STARFORGED_DELETE_TRIGGER_MESSAGES", "false")
    s = load_settings()
    assert s.command_prefix == "!"
    assert s.discord_token.get_secret_value() == "abc123"
    assert s.delete_trigger_messages is False


def test_toml_is_lower_priority_than_env(clean_env, monkeypatch):
    (clean_env / "config.toml").write_text(
        '[bot]\ncommand_prefix = "?"\nemphasize_replies = false\n'
        '[logging]\nlevel = "debug"\nconsole = false\nto_file = true\n'
    )
    s = load_settings()
    assert s.command_prefix == "?"
    assert s.emphasize_replies is False
    assert s.logging_level == "DEBUG"
    assert s.logging_console == "NONE"
    assert s.logging_file == "DEBUG"

    monkeypatch.setenv("STARFORGED_COMMAND_PREFIX", "$")
    assert load_settings().command_prefix == "$"


def test_dotenv(clean_env):
    (clean_env / ".env").write_text("STARFORGED_MAX_MESSAGE_LENGTH=50\n")
    assert load_settings().max_message_length == 50


def test_require_token(clean_env):
    with pytest.raises(MissingTokenError) as ei:
        require_token(Settings())
    assert str(ei.value) == MISSING_TOKEN_ERROR == "Missing STARFORGED_DISCORD_TOKEN environment variable"
    assert require_token(Settings(discord_token=SecretStr("t0k"))) == "t0k"


def test_redact_settings_masks_token(clean_env):
    data = redact_settings(Settings(discord_token=SecretStr("t0k")))
    assert data["discord_token"] == "[REDACTED]"
    assert data["command_prefix"] == "/"
