"""
conftest.py - Shared fixtures for pytest.
"""
import io
import tarfile
from pathlib import Path
from typing import Callable, Optional

import pytest

MAKEPKG_PKGINFO = b"""# Generated by makepkg 5.0.1
# using fakeroot version 1.21
# Sun Oct 30 16:09:47 UTC 2016
pkgname = repose-git
pkgver = 6.2.10.gbab93f3-1
pkgdesc = A archlinux repo building tool
url = http://github.com/vodik/repose
builddate = 1477843787
packager = Simon Gomizelj <simongmzlj@gmail.com>
size = 63488
arch = x86_64
license = GPL
conflict = repose
provides = repose
depend = pacman
depend = libarchive
depend = gnupg
makedepend = git
makedepend = ragel
"""


@pytest.fixture
def makepkg_pkginfo() -> bytes:
    """A .PKGINFO as written by makepkg."""
    return MAKEPKG_PKGINFO


def build_package_archive(pkginfo: Optional[bytes], compression: str = "xz",
                          pkginfo_first: bool = True) -> bytes:
    """Builds an in-memory package tarball, optionally without a .PKGINFO member."""
    buffer = io.BytesIO()
    mode = f"w:{compression}" if compression else "w"

    def add_file(tar: tarfile.TarFile, name: str, data: bytes):
        info = tarfile.TarInfo(name)
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))

    with tarfile.open(fileobj=buffer, mode=mode) as tar:
        if pkginfo is not None and pkginfo_first:
            add_file(tar, ".PKGINFO", pkginfo)
        add_file(tar, ".BUILDINFO", b"format = 2\n")
        add_file(tar, "usr/bin/repose", b"#!/bin/sh\n")
        if pkginfo is not None and not pkginfo_first:
            add_file(tar, ".PKGINFO", pkginfo)
    return buffer.getvalue()


@pytest.fixture
def package_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a package archive into tmp_path and returning its path."""
    def _make(pkginfo: Optional[bytes], filename: str = "repose-git-6.2.10-1-x86_64.pkg.tar.xz",
              **kwargs) -> Path:
        path = tmp_path / filename
        path.write_bytes(build_package_archive(pkginfo, **kwargs))
        return path
    return _make


@pytest.fixture
def package_archive() -> Callable[..., bytes]:
    """Factory returning package archive bytes (see build_package_archive)."""
    return build_package_archive
