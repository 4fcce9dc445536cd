"""
models.py - Core data structures for the PKGINFO reader.
"""
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

__version__ = "0.3.0"

# --- Configuration Models ---

@dataclass(frozen=True)
class ReaderConfiguration:
    """Runtime configuration, loaded from environment (see config.py)."""
    debug_mode: bool = False
    force_gha_logging: bool = False
    strict_mode: bool = True            # Reject PKGINFO files with unrecognized trailing lines
    http_timeout: float = 15.0          # Seconds, for mirror downloads
    user_agent: str = f"pkginfo-reader/{__version__}"
    mirror_url: Optional[str] = None    # e.g. "https://geo.mirror.pkgbuild.com"

    def package_url(self, repo: str, arch: str, filename: str) -> str:
        """
        Builds a download URL using the standard Arch mirror layout:
        <mirror>/<repo>/os/<arch>/<filename>
        """
        if not self.mirror_url:
            raise ValueError("No mirror configured (set PKGINFO_MIRROR_URL).")
        return f"{self.mirror_url.rstrip('/')}/{repo}/os/{arch}/{filename}"

# --- PKGINFO Key Models ---

class ValueKind(enum.Enum):
    """Shape of a metadata value; governs how repeated keys merge."""
    TEXT = "text"
    SIZE = "size"             # unsigned 64-bit
    TIMESTAMP = "timestamp"   # signed 64-bit, seconds since the epoch
    LIST = "list"


class Entry(enum.Enum):
    """Recognized PKGINFO metadata fields."""
    Base = "Base"
    Description = "Description"
    Url = "Url"
    BuildDate = "BuildDate"
    Packager = "Packager"
    InstallSize = "InstallSize"
    Groups = "Groups"
    License = "License"
    Replaces = "Replaces"
    Depends = "Depends"
    Conflicts = "Conflicts"
    Provides = "Provides"
    OptDepends = "OptDepends"
    MakeDepends = "MakeDepends"
    CheckDepends = "CheckDepends"
    Backups = "Backups"
    BuildOptions = "BuildOptions"
    BuildDirectory = "BuildDirectory"
    BuildEnvironment = "BuildEnvironment"
    SHA256Sum = "SHA256Sum"
    BuildInstalled = "BuildInstalled"

    @property
    def kind(self) -> ValueKind:
        return ENTRY_KINDS[self]

    @property
    def key(self) -> str:
        """Canonical key literal as written by makepkg."""
        return ENTRY_KEYS[self]

    @classmethod
    def from_key(cls, key: str) -> Optional["Entry"]:
        return KEY_TABLE.get(key)


# Key literal -> Entry. Order matters only for Entry.key: the first literal
# listed for an entry is its canonical spelling.
KEY_TABLE: Dict[str, Entry] = {
    "pkgbase": Entry.Base,
    "pkgdesc": Entry.Description,
    "url": Entry.Url,
    "builddate": Entry.BuildDate,
    "packager": Entry.Packager,
    "size": Entry.InstallSize,
    "group": Entry.Groups,
    "license": Entry.License,
    "replaces": Entry.Replaces,
    "depend": Entry.Depends,
    "conflict": Entry.Conflicts,
    "provides": Entry.Provides,
    "optdepend": Entry.OptDepends,
    "makedepend": Entry.MakeDepends,
    "checkdepend": Entry.CheckDepends,
    "backup": Entry.Backups,
    "makepkgopt": Entry.BuildOptions,
    "options": Entry.BuildOptions,
    "builddir": Entry.BuildDirectory,
    "buildenv": Entry.BuildEnvironment,
    "pkgbuild_sha256sum": Entry.SHA256Sum,
    "installed": Entry.BuildInstalled,
}

ENTRY_KEYS: Dict[Entry, str] = {}
for _key, _entry in KEY_TABLE.items():
    ENTRY_KEYS.setdefault(_entry, _key)

_TEXT_ENTRIES = (Entry.Base, Entry.Description, Entry.Url, Entry.Packager,
                 Entry.BuildDirectory, Entry.SHA256Sum)

ENTRY_KINDS: Dict[Entry, ValueKind] = {
    entry: (ValueKind.TEXT if entry in _TEXT_ENTRIES else ValueKind.LIST)
    for entry in Entry
}
ENTRY_KINDS[Entry.InstallSize] = ValueKind.SIZE
ENTRY_KINDS[Entry.BuildDate] = ValueKind.TIMESTAMP

# --- Token Models (transient, one parse call) ---

@dataclass(frozen=True)
class Comment:
    pass


@dataclass(frozen=True)
class Name:
    value: str


@dataclass(frozen=True)
class Version:
    value: str


@dataclass(frozen=True)
class Arch:
    value: str


@dataclass(frozen=True)
class MetadataEntry:
    """One raw occurrence of a recognized metadata key."""
    entry: Entry
    value: str


Token = Union[Comment, Name, Version, Arch, MetadataEntry]

# --- Package Models ---

@dataclass(frozen=True)
class MetadataValue:
    """A metadata value tagged with its kind. LIST values are stored as tuples."""
    kind: ValueKind
    value: Union[str, int, Tuple[str, ...]]

    @classmethod
    def text(cls, value: str) -> "MetadataValue":
        return cls(ValueKind.TEXT, value)

    @classmethod
    def size(cls, value: int) -> "MetadataValue":
        return cls(ValueKind.SIZE, value)

    @classmethod
    def timestamp(cls, value: int) -> "MetadataValue":
        return cls(ValueKind.TIMESTAMP, value)

    @classmethod
    def list(cls, *values: str) -> "MetadataValue":
        return cls(ValueKind.LIST, tuple(values))


@dataclass(frozen=True)
class Package:
    """
    A package record assembled from a PKGINFO file.

    The metadata mapping is read-only; list values are tuples, so a Package
    cannot be changed after construction.
    """
    name: str
    version: str
    arch: str = ""
    metadata: Mapping[Entry, MetadataValue] = field(default_factory=dict)

    def __post_init__(self):
        for entry, meta in self.metadata.items():
            if meta.kind is not entry.kind:
                raise ValueError(f"Metadata for {entry.name} must be {entry.kind.value}, got {meta.kind.value}")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Package):
            return NotImplemented
        return (self.name, self.version, self.arch, dict(self.metadata)) == \
               (other.name, other.version, other.arch, dict(other.metadata))

    def __hash__(self) -> int:
        return hash((self.name, self.version, self.arch, frozenset(self.metadata.items())))

    def get(self, entry: Entry, default: Any = None) -> Any:
        """Returns the plain value (str, int or tuple) for an entry."""
        meta = self.metadata.get(entry)
        return meta.value if meta is not None else default

    @property
    def build_datetime(self) -> Optional[datetime]:
        timestamp = self.get(Entry.BuildDate)
        if timestamp is None:
            return None
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    @property
    def filename_stem(self) -> str:
        """'name-version-arch', as used in package file names."""
        return f"{self.name}-{self.version}-{self.arch}"

# --- Result Models ---

@dataclass
class TokenizeResult:
    """Tokens read from a buffer plus the bytes that were not consumed."""
    tokens: List[Token]
    remainder: bytes = b""
    incomplete: bool = False    # Buffer ended mid-line; more bytes are needed


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parse_pkginfo().

    package is None when pkgname or pkgver never appeared, or when the input
    is incomplete. A non-empty remainder means parsing stopped at an
    unrecognized line.
    """
    package: Optional[Package]
    remainder: bytes = b""
    incomplete: bool = False

    @property
    def fully_consumed(self) -> bool:
        return not self.incomplete and not self.remainder
