"""Runtime configuration for gitreword, read from the environment."""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from loguru import logger


@dataclass(frozen=True)
class Settings:
    """Process-wide settings.

    Values come from ``GITREWORD_*`` environment variables, optionally loaded
    from a ``.env`` file.
    """

    default_branch: str = "main"
    git_timeout: float = 300.0  # seconds, 0 disables
    default_commits: int = 10
    max_commits: int = 100
    log_level: str = "INFO"

    @property
    def kill_after_timeout(self):
        """Timeout in the form GitPython's ``kill_after_timeout`` expects."""
        return self.git_timeout if self.git_timeout > 0 else None


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value < 0:
        logger.warning(f"Ignoring negative {name}={raw!r}, using {default}")
        return default
    return value


def load_settings() -> Settings:
    """Build a fresh Settings from the current environment."""
    load_dotenv()
    return Settings(
        default_branch=os.getenv("GITREWORD_DEFAULT_BRANCH") or Settings.default_branch,
        git_timeout=_env_number("GITREWORD_GIT_TIMEOUT", Settings.git_timeout, float),
        default_commits=_env_number("GITREWORD_DEFAULT_COMMITS", Settings.default_commits, int) or 1,
        max_commits=_env_number("GITREWORD_MAX_COMMITS", Settings.max_commits, int) or 1,
        log_level=(os.getenv("GITREWORD_LOG_LEVEL") or Settings.log_level).upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings shared by the whole process. Call ``get_settings.cache_clear()`` to reload."""
    return load_settings()
