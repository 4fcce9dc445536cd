"""
remote.py - Downloads packages from a repository mirror and reads their .PKGINFO.
"""
import logging
from typing import Optional

import requests

from .archive import extract_pkginfo
from .exceptions import PkginfoFetchError
from .models import Package, ReaderConfiguration
from .parser import read_pkginfo

logger = logging.getLogger(__name__)


def fetch_package(url: str, config: Optional[ReaderConfiguration] = None) -> bytes:
    """
    Downloads a package file.

    Args:
        url: Full URL of the .pkg.tar.* file.
        config: Supplies the timeout and User-Agent; defaults are used if omitted.

    Returns:
        The raw archive bytes.

    Raises:
        PkginfoFetchError: If the URL is empty or the request fails.
    """
    config = config or ReaderConfiguration()
    if not url:
        raise PkginfoFetchError(url, "URL cannot be empty")

    logger.info(f"Downloading package from {url}")
    try:
        response = requests.get(
            url,
            timeout=config.http_timeout,
            headers={"User-Agent": config.user_agent},
        )
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise PkginfoFetchError(url, f"HTTP error: {e}") from e
    except requests.exceptions.RequestException as e:
        raise PkginfoFetchError(url, f"Network error: {e}") from e

    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return response.content


def fetch_pkginfo(url: str, config: Optional[ReaderConfiguration] = None,
                  strict: Optional[bool] = None) -> Optional[Package]:
    """
    Downloads a package and parses its .PKGINFO.

    strict defaults to config.strict_mode.
    """
    config = config or ReaderConfiguration()
    if strict is None:
        strict = config.strict_mode
    data = extract_pkginfo(fetch_package(url, config), label=url)
    return read_pkginfo(data, strict=strict)
