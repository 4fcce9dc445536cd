"""
assembler.py - Folds PKGINFO tokens into a Package record.
"""
import logging
import re
from typing import Dict, Iterable, List, Optional, Union

from .exceptions import DuplicateScalarFieldError, MalformedNumericFieldError
from .models import (
    Arch, Comment, Entry, MetadataEntry, MetadataValue, Name, Package, Token, ValueKind, Version,
)

logger = logging.getLogger(__name__)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")

_U64_MAX = 2**64 - 1
_I64_MIN, _I64_MAX = -2**63, 2**63 - 1


def _parse_integer(entry: Entry, value: str) -> int:
    """Parses a size (u64) or timestamp (i64). Only an optional sign and ASCII digits are accepted."""
    if entry.kind is ValueKind.SIZE:
        pattern, low, high = _UNSIGNED_RE, 0, _U64_MAX
    else:
        pattern, low, high = _SIGNED_RE, _I64_MIN, _I64_MAX

    if not pattern.fullmatch(value):
        raise MalformedNumericFieldError(entry, value)
    number = int(value)
    if not low <= number <= high:
        raise MalformedNumericFieldError(entry, value, f"{entry.key} value {value} is out of range")
    return number


def _initial_value(entry: Entry, value: str) -> Union[str, int, List[str]]:
    kind = entry.kind
    if kind is ValueKind.TEXT:
        return value
    if kind is ValueKind.LIST:
        return [value]
    return _parse_integer(entry, value)


def _freeze(entry: Entry, value: Union[str, int, List[str]]) -> MetadataValue:
    if entry.kind is ValueKind.LIST:
        return MetadataValue.list(*value)
    return MetadataValue(entry.kind, value)


def assemble(tokens: Iterable[Token]) -> Optional[Package]:
    """
    Builds a Package from a token sequence.

    pkgname, pkgver and arch are last-one-wins. A list field accumulates
    every occurrence in file order. A text or integer field must appear at
    most once.

    Returns:
        The Package, or None if pkgname or pkgver never appeared.

    Raises:
        MalformedNumericFieldError: A size or timestamp value is not an integer.
        DuplicateScalarFieldError: A single-valued field is repeated.
    """
    name: Optional[str] = None
    version: Optional[str] = None
    arch: Optional[str] = None
    metadata: Dict[Entry, Union[str, int, List[str]]] = {}

    for token in tokens:
        if isinstance(token, Comment):
            continue
        elif isinstance(token, Name):
            name = token.value
        elif isinstance(token, Version):
            version = token.value
        elif isinstance(token, Arch):
            arch = token.value
        elif isinstance(token, MetadataEntry):
            entry = token.entry
            if entry not in metadata:
                metadata[entry] = _initial_value(entry, token.value)
            elif entry.kind is ValueKind.LIST:
                metadata[entry].append(token.value)
            else:
                raise DuplicateScalarFieldError(entry, token.value)
        else:
            raise TypeError(f"Unexpected token: {token!r}")

    if name is None or version is None:
        logger.debug(f"No package assembled: pkgname={name!r}, pkgver={version!r}")
        return None

    return Package(
        name=name,
        version=version,
        arch=arch if arch is not None else "",
        metadata={entry: _freeze(entry, value) for entry, value in metadata.items()},
    )
