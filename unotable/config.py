"""Settings read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Server settings. Every field can be set with an UNOTABLE_* variable."""

    max_players: int = 4
    min_players: int = 2
    turn_timeout: float = 30.5  # seconds
    tick_interval: float = 1.0
    database: str = "database.db"
    host: str = "0.0.0.0"
    port: int = 4000
    conceal_hands: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            max_players=int(os.getenv("UNOTABLE_MAX_PLAYERS", defaults.max_players)),
            min_players=int(os.getenv("UNOTABLE_MIN_PLAYERS", defaults.min_players)),
            turn_timeout=float(os.getenv("UNOTABLE_TURN_TIMEOUT", defaults.turn_timeout)),
            tick_interval=float(os.getenv("UNOTABLE_TICK_INTERVAL", defaults.tick_interval)),
            database=os.getenv("UNOTABLE_DATABASE", defaults.database),
            host=os.getenv("UNOTABLE_HOST", defaults.host),
            port=int(os.getenv("UNOTABLE_PORT", defaults.port)),
            conceal_hands=_env_bool("UNOTABLE_CONCEAL_HANDS", defaults.conceal_hands),
            log_level=os.getenv("UNOTABLE_LOG_LEVEL", defaults.log_level).upper(),
        )
