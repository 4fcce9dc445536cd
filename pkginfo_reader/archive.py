"""
archive.py - Reads the .PKGINFO member out of a built package (.pkg.tar.*).
"""
import io
import logging
import tarfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .exceptions import PackageArchiveError
from .models import Package
from .parser import read_pkginfo

logger = logging.getLogger(__name__)

PKGINFO_MEMBER = ".PKGINFO"


def extract_pkginfo(source: Union[bytes, BinaryIO], label: str = "<package>") -> bytes:
    """
    Returns the raw .PKGINFO bytes from a package tarball.

    Compression is detected by tarfile ('r:*'). makepkg writes .PKGINFO as
    the first member, so normally only the archive head is read.

    Args:
        source: The archive as bytes or a binary file object.
        label: Name used in error messages (usually the file path or URL).

    Raises:
        PackageArchiveError: Unreadable archive or no usable .PKGINFO member.
    """
    fileobj = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        with tarfile.open(fileobj=fileobj, mode="r:*") as tar:
            member = tar.next()
            if member is None or not _is_pkginfo(member):
                logger.warning(f"{label}: .PKGINFO is not the first archive member, scanning the whole archive.")
                member = _find_member(tar)
            if member is None:
                raise PackageArchiveError(label, "archive does not contain .PKGINFO")
            if not member.isfile():
                raise PackageArchiveError(label, ".PKGINFO is not a regular file")
            extracted = tar.extractfile(member)
            if extracted is None:
                raise PackageArchiveError(label, ".PKGINFO could not be extracted")
            data = extracted.read()
    except (tarfile.TarError, EOFError, OSError) as e:
        raise PackageArchiveError(label, f"not a readable package archive ({e})") from e

    logger.debug(f"{label}: read {len(data)} bytes of .PKGINFO")
    return data


def _is_pkginfo(member: tarfile.TarInfo) -> bool:
    return member.name in (PKGINFO_MEMBER, f"./{PKGINFO_MEMBER}")


def _find_member(tar: tarfile.TarFile) -> Optional[tarfile.TarInfo]:
    for member in tar:
        if _is_pkginfo(member):
            return member
    return None


def read_package_file(path: Union[str, Path], strict: bool = True) -> Optional[Package]:
    """Parses the .PKGINFO of a package file on disk."""
    path = Path(path)
    if not path.is_file():
        raise PackageArchiveError(str(path), "file not found")
    with open(path, "rb") as f:
        data = extract_pkginfo(f, label=str(path))
    package = read_pkginfo(data, strict=strict)
    if package is not None:
        logger.info(f"Read {package.filename_stem} from {path.name}")
    return package
