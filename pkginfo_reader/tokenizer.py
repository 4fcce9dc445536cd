"""
tokenizer.py - Splits a raw PKGINFO buffer into typed tokens.

Grammar, one directive per line:

    # comment text
    key = value

Tokenization stops quietly at the first line that is neither a comment nor a
recognized key; that line and everything after it are returned as the
remainder. A buffer that ends mid-line is reported as incomplete.
"""
import logging
import re
from typing import List

from .exceptions import PkginfoDecodeError
from .models import (
    KEY_TABLE, Arch, Comment, MetadataEntry, Name, Token, TokenizeResult, Version,
)

logger = logging.getLogger(__name__)

# Key, then the separator: optional blanks, '=', optional blanks.
_DIRECTIVE_RE = re.compile(rb"([A-Za-z0-9_]+)[ \t]*=[ \t]*")
# Tail of a buffer that could still grow into a directive.
_PARTIAL_DIRECTIVE_RE = re.compile(rb"([A-Za-z0-9_]*)([ \t]*)\Z")
_WHITESPACE_RE = re.compile(rb"[ \t\r\n]*")

_FIELD_TOKENS = {
    b"pkgname": Name,
    b"pkgver": Version,
    b"arch": Arch,
}
_METADATA_KEYS = {key.encode("ascii"): entry for key, entry in KEY_TABLE.items()}
_ALL_KEYS = tuple(_FIELD_TOKENS) + tuple(_METADATA_KEYS)


def _could_become_directive(fragment: bytes) -> bool:
    """True if an unterminated tail may still turn into a recognized line once more bytes arrive."""
    match = _PARTIAL_DIRECTIVE_RE.match(fragment)
    if not match:
        return False
    word, blanks = match.groups()
    if not word:
        return False
    if blanks:
        return word in _FIELD_TOKENS or word in _METADATA_KEYS
    return any(key.startswith(word) for key in _ALL_KEYS)


def _decode_value(data: bytes, start: int, end: int, line_start: int) -> str:
    try:
        return data[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise PkginfoDecodeError(offset=start + e.start, line=data[line_start:end], reason=e.reason) from e


def tokenize(data: bytes) -> TokenizeResult:
    """
    Tokenizes a PKGINFO buffer.

    Args:
        data: Raw PKGINFO bytes.

    Returns:
        A TokenizeResult holding the tokens, the unconsumed remainder and
        whether the buffer ended mid-line.

    Raises:
        PkginfoDecodeError: If a value is not valid UTF-8.
    """
    data = bytes(data)
    tokens: List[Token] = []
    pos = 0

    while pos < len(data):
        line_end = data.find(b"\n", pos)

        if data.startswith(b"#", pos):
            if line_end == -1:
                return TokenizeResult(tokens=tokens, remainder=data[pos:], incomplete=True)
            tokens.append(Comment())
        else:
            match = _DIRECTIVE_RE.match(data, pos)
            key = match.group(1) if match else None
            if key not in _FIELD_TOKENS and key not in _METADATA_KEYS:
                if line_end == -1 and _could_become_directive(data[pos:]):
                    return TokenizeResult(tokens=tokens, remainder=data[pos:], incomplete=True)
                line = data[pos:] if line_end == -1 else data[pos:line_end]
                logger.debug(f"Stopping at unrecognized PKGINFO line at byte {pos}: {line!r}")
                break
            if line_end == -1:
                return TokenizeResult(tokens=tokens, remainder=data[pos:], incomplete=True)

            value = _decode_value(data, match.end(), line_end, pos)
            if key in _FIELD_TOKENS:
                tokens.append(_FIELD_TOKENS[key](value))
            else:
                tokens.append(MetadataEntry(_METADATA_KEYS[key], value))

        # Line break plus any blank lines (and leading blanks) before the next token
        pos = _WHITESPACE_RE.match(data, line_end).end()

    return TokenizeResult(tokens=tokens, remainder=data[pos:])
