"""
exceptions.py - Custom exceptions for the PKGINFO reader.
"""
from typing import Optional


class PkginfoError(Exception):
    """Base exception for this package."""
    pass


class PkginfoDecodeError(PkginfoError):
    """A value in the PKGINFO buffer is not valid UTF-8 text."""
    def __init__(self, offset: int, line: bytes, reason: str):
        self.offset = offset
        self.line = line
        self.reason = reason
        super().__init__(f"Invalid UTF-8 at byte {offset} in line {line!r}: {reason}")


class MalformedNumericFieldError(PkginfoError):
    """A size or timestamp field could not be parsed as an integer."""
    def __init__(self, entry, value: str, message: Optional[str] = None):
        self.entry = entry
        self.value = value
        super().__init__(message or f"Malformed {entry.key} value {value!r}: expected an integer")


class DuplicateScalarFieldError(PkginfoError):
    """A single-valued (text or integer) field appeared more than once."""
    def __init__(self, entry, value: str):
        self.entry = entry
        self.value = value
        super().__init__(f"Field '{entry.key}' appeared more than once (repeated value: {value!r})")


class IncompleteInputError(PkginfoError):
    """The buffer ended in the middle of a line."""
    def __init__(self, remainder: bytes):
        self.remainder = remainder
        super().__init__(f"PKGINFO input ends mid-line ({len(remainder)} unterminated bytes)")


class TrailingDataError(PkginfoError):
    """Strict parsing stopped at an unrecognized line."""
    def __init__(self, remainder: bytes):
        self.remainder = remainder
        first_line = remainder.split(b"\n", 1)[0]
        super().__init__(f"Unrecognized PKGINFO line: {first_line!r}")


class PackageArchiveError(PkginfoError):
    """Error reading .PKGINFO out of a package archive."""
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to read {path}: {message}")


class PkginfoFetchError(PkginfoError):
    """Error downloading a package from a mirror."""
    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"Failed to fetch {url}: {message}")
