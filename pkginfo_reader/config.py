"""
config.py - Loads and provides the ReaderConfiguration.
"""
import os
from typing import Optional

from dotenv import load_dotenv

from .models import ReaderConfiguration, __version__


def _get_env_var(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value == "": # Empty counts as unset
        return default
    return value


def _to_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ['true', '1', 'yes']


def _to_timeout(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        timeout = float(value)
    except ValueError:
        raise ValueError(f"PKGINFO_HTTP_TIMEOUT must be a number of seconds, got '{value}'") from None
    if timeout <= 0:
        raise ValueError(f"PKGINFO_HTTP_TIMEOUT must be positive, got '{value}'")
    return timeout


def load_configuration(dotenv_path: Optional[str] = None) -> ReaderConfiguration:
    """
    Loads configuration from environment variables into a ReaderConfiguration.

    A .env file (dotenv_path, or one found from the working directory) is
    loaded first; variables already set in the environment take precedence.
    """
    load_dotenv(dotenv_path=dotenv_path)

    return ReaderConfiguration(
        debug_mode=_to_bool(_get_env_var("PKGINFO_DEBUG")),
        force_gha_logging=_to_bool(_get_env_var("PKGINFO_FORCE_GHA_LOGGING")),
        strict_mode=_to_bool(_get_env_var("PKGINFO_STRICT"), default=True),
        http_timeout=_to_timeout(_get_env_var("PKGINFO_HTTP_TIMEOUT"), default=15.0),
        user_agent=_get_env_var("PKGINFO_USER_AGENT", f"pkginfo-reader/{__version__}"),
        mirror_url=_get_env_var("PKGINFO_MIRROR_URL"),
    )
