"""Configuration settings for ExitCheck."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _parse_days(raw: str) -> tuple[int, ...]:
    return tuple(int(part) for part in raw.split(",") if part.strip())


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """ExitCheck configuration."""

    # Data storage
    data_dir: Path = field(default_factory=lambda: Path.home() / ".exitcheck")
    db_name: str = "exitcheck_db"
    streak_state_file: str = "streak.json"

    # Home zone
    default_radius: float = 100.0

    # Exit session behavior
    auto_check_phone: bool = True
    ask_for_feedback: bool = True
    feedback_after_exits: int = 5

    # Exit detection
    exit_debounce_seconds: float = 60.0
    signal_queue_size: int = 64
    signal_post_timeout: float = 1.0

    # Pattern analysis
    min_pattern_occurrences: int = 2
    suggestion_limit: int = 3
    # ISO weekdays (Monday=1 .. Sunday=7) treated as weekend
    weekend_days: tuple[int, ...] = (6, 7)

    @property
    def db_path(self) -> Path:
        """Get the full database path."""
        return self.data_dir / self.db_name

    @property
    def streak_state_path(self) -> Path:
        """Get the full path of the streak state document."""
        return self.data_dir / self.streak_state_file

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        data_dir_str = os.environ.get("EXITCHECK_DATA_DIR")
        data_dir = Path(data_dir_str) if data_dir_str else Path.home() / ".exitcheck"

        return cls(
            data_dir=data_dir,
            db_name=os.environ.get("EXITCHECK_DB_NAME", "exitcheck_db"),
            streak_state_file=os.environ.get(
                "EXITCHECK_STREAK_STATE_FILE", "streak.json"
            ),
            default_radius=float(os.environ.get("EXITCHECK_DEFAULT_RADIUS", "100")),
            auto_check_phone=_parse_bool(
                os.environ.get("EXITCHECK_AUTO_CHECK_PHONE", "true")
            ),
            ask_for_feedback=_parse_bool(
                os.environ.get("EXITCHECK_ASK_FOR_FEEDBACK", "true")
            ),
            feedback_after_exits=int(
                os.environ.get("EXITCHECK_FEEDBACK_AFTER_EXITS", "5")
            ),
            exit_debounce_seconds=float(
                os.environ.get("EXITCHECK_EXIT_DEBOUNCE_SECONDS", "60")
            ),
            signal_queue_size=int(os.environ.get("EXITCHECK_SIGNAL_QUEUE_SIZE", "64")),
            signal_post_timeout=float(
                os.environ.get("EXITCHECK_SIGNAL_POST_TIMEOUT", "1.0")
            ),
            min_pattern_occurrences=int(
                os.environ.get("EXITCHECK_MIN_PATTERN_OCCURRENCES", "2")
            ),
            suggestion_limit=int(os.environ.get("EXITCHECK_SUGGESTION_LIMIT", "3")),
            weekend_days=_parse_days(os.environ.get("EXITCHECK_WEEKEND_DAYS", "6,7")),
        )


_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the config (for testing)."""
    global _config
    _config = None
