"""
parser.py - Public entry points: tokenize, then assemble.
"""
import logging
from typing import Optional

from .assembler import assemble
from .exceptions import IncompleteInputError, TrailingDataError
from .models import Package, ParseResult
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_pkginfo(data: bytes) -> ParseResult:
    """
    Parses a PKGINFO buffer.

    Unknown keys and missing pkgname/pkgver are not errors: they show up as a
    non-empty remainder and a None package respectively. An incomplete
    buffer yields incomplete=True and no package.

    Raises:
        PkginfoDecodeError, MalformedNumericFieldError, DuplicateScalarFieldError
    """
    tokenized = tokenize(data)
    if tokenized.incomplete:
        return ParseResult(package=None, remainder=tokenized.remainder, incomplete=True)
    return ParseResult(package=assemble(tokenized.tokens), remainder=tokenized.remainder)


def read_pkginfo(data: bytes, strict: bool = True) -> Optional[Package]:
    """
    Parses a complete .PKGINFO file.

    Args:
        data: The whole file.
        strict: If True, an unrecognized line is an error. Otherwise parsing
                stops there and the rest is ignored with a warning.

    Returns:
        The Package, or None if pkgname or pkgver is missing.

    Raises:
        IncompleteInputError: The file ends mid-line.
        TrailingDataError: strict is set and an unrecognized line was found.
    """
    result = parse_pkginfo(data)
    if result.incomplete:
        raise IncompleteInputError(result.remainder)
    if result.remainder:
        if strict:
            raise TrailingDataError(result.remainder)
        first_line = result.remainder.split(b"\n", 1)[0]
        logger.warning(f"Ignoring PKGINFO content from unrecognized line {first_line!r} "
                       f"({len(result.remainder)} bytes)")
    if result.package is None:
        logger.warning("PKGINFO has no pkgname or pkgver; no package produced.")
    return result.package


class PkginfoStreamParser:
    """
    Incremental parser for callers that receive PKGINFO in chunks.

    feed() returns the ParseResult for everything buffered so far, or None
    while the buffer ends mid-line. close() parses whatever is left.
    """
    def __init__(self):
        self._buffer = bytearray()
        self._closed = False

    def feed(self, chunk: bytes) -> Optional[ParseResult]:
        if self._closed:
            raise ValueError("feed() called after close()")
        self._buffer.extend(chunk)
        result = parse_pkginfo(bytes(self._buffer))
        if result.incomplete:
            logger.debug(f"Buffered {len(self._buffer)} bytes, waiting for more input")
            return None
        return result

    def close(self) -> ParseResult:
        """Finishes the stream, terminating a final unterminated line."""
        self._closed = True
        data = bytes(self._buffer)
        if data and not data.endswith(b"\n"):
            data += b"\n"
        return parse_pkginfo(data)
