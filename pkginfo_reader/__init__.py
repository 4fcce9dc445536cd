"""
pkginfo_reader - Parser for the .PKGINFO metadata embedded in pacman packages.
"""
from .assembler import assemble
from .exceptions import (
    DuplicateScalarFieldError,
    IncompleteInputError,
    MalformedNumericFieldError,
    PackageArchiveError,
    PkginfoDecodeError,
    PkginfoError,
    PkginfoFetchError,
    TrailingDataError,
)
from .models import (
    Entry, MetadataValue, Package, ParseResult, ReaderConfiguration, TokenizeResult, ValueKind,
    __version__,
)
from .parser import PkginfoStreamParser, parse_pkginfo, read_pkginfo
from .tokenizer import tokenize
