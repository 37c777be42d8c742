#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import functools
import logging
from pathlib import Path

from .database import Database
from .parser import parse
from .types import Generator, Optional, PathLike

log = logging.getLogger(__name__)

SHARE_PATH = Path("/usr/share")

HWDATA_PATH: Path = SHARE_PATH / "hwdata" / "pci.ids"
MISC_PATH: Path = SHARE_PATH / "misc" / "pci.ids"

PATHS: tuple[Path, ...] = (
    HWDATA_PATH,
    MISC_PATH,
    SHARE_PATH / "pci.ids",
    Path("/usr/local/share/pci.ids"),
)

DEFAULT_PATH: Path = PATHS[0]


def find_path() -> Optional[Path]:
    """First pci.ids file found in the usual system locations or None"""
    for path in PATHS:
        if path.is_file():
            return path


def iter_lines(path: PathLike) -> Generator[str, None, None]:
    """
    Iterate over the lines of a pci.ids file.
    Bytes which are not valid UTF-8 are replaced.
    """
    with open(path, encoding="utf-8", errors="replace") as fobj:
        yield from fobj


def load(path: Optional[PathLike] = None, vendors: bool = True, classes: bool = True) -> Database:
    """
    Read and parse a pci.ids file.

    Args:
        path: the file to read (default: first file found in PATHS)
        vendors (bool): keep the vendor tree (default: True)
        classes (bool): keep the class tree (default: True)

    Raises:
        FileNotFoundError: no path given and no system pci.ids file found
        ParseError: the file is malformed
    """
    if path is None:
        path = find_path()
        if path is None:
            raise FileNotFoundError(f"Could not find pci.ids in any of {', '.join(map(str, PATHS))}")
    log.info("Loading %s...", path)
    db = parse(iter_lines(path), vendors=vendors, classes=classes)
    log.info("Loaded %s: %d vendors, %d classes", path, len(db.vendors), len(db.classes))
    return db


@functools.cache
def default() -> Database:
    """The system pci.ids database, parsed once per process"""
    return load()
