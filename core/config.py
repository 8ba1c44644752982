# =============================================================================
# core/config.py  -  Settings loaded from the environment
# =============================================================================
#
# The server needs exactly one secret: the bot token issued by @BotFather.
# It is read from TELEGRAM_BOT_TOKEN.  Entry points call load_dotenv() first,
# so a .env file next to the project works as well as a real environment.
#
# OPTIONAL VARIABLES:
#   TELEGRAM_API_BASE  - Bot API host (default https://api.telegram.org).
#                        Point it at a local Bot API server if you run one.
#   LOG_LEVEL          - Level for the stderr log (default INFO).
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

TOKEN_ENV_VAR = "TELEGRAM_BOT_TOKEN"
DEFAULT_API_BASE = "https://api.telegram.org"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup."""

    bot_token: str
    api_base: str = DEFAULT_API_BASE
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Never print the token
        return f"Settings(bot_token='***', api_base={self.api_base!r}, log_level={self.log_level!r})"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Raises:
        ConfigurationError: if TELEGRAM_BOT_TOKEN is unset or blank.
    """
    env = os.environ if environ is None else environ

    bot_token = env.get(TOKEN_ENV_VAR, "").strip()
    if not bot_token:
        raise ConfigurationError(f"Please set {TOKEN_ENV_VAR} environment variable")

    return Settings(
        bot_token=bot_token,
        api_base=env.get("TELEGRAM_API_BASE", DEFAULT_API_BASE).rstrip("/") or DEFAULT_API_BASE,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
