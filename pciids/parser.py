#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
pci.ids text format parser.

The file is a sequence of lines where the number of leading tabs gives the
depth of an entry in one of two trees:

```
# comment
8086  Intel Corporation                  <- vendor (depth 0)
	1234  Some Device                    <- device (depth 1)
		8086 0001  Some Subsystem        <- subsystem (depth 2)
C 03  Display controller                 <- class (depth 0, "C" marker)
	00  VGA compatible controller        <- subclass (depth 1)
		00  VGA controller               <- programming interface (depth 2)
```

Depth 1 and 2 lines belong to the tree of the depth 0 entry that was opened
most recently, so class and vendor sections may be interleaved.
"""

import enum
import logging
import re

from .database import Database
from .ids import Class, Device, ProgInterface, SubClass, Subsystem, SubsystemKey, Vendor
from .types import Iterable, Optional
from .util import is_hex, parse_hex

log = logging.getLogger(__name__)

CLASS_MARKER = "C"
MAX_DEPTH = 2

VENDOR_ID_WIDTH = 4
CLASS_ID_WIDTH = 2

INLINE_COMMENT_RE = re.compile(r"\s#.*$")


class PciIdsError(Exception):
    """Base pciids error"""


class ErrorKind(enum.Enum):
    MALFORMED_INDENTATION = "malformed indentation"
    MALFORMED_IDENTIFIER = "malformed identifier"
    ORPHANED_ENTRY = "orphaned entry"
    UNRECOGNIZED_LINE = "unrecognized line"


class ParseError(PciIdsError):
    """
    pci.ids syntax error

    Attributes:
        kind (ErrorKind): what went wrong
        lineno (int): 1-based number of the offending line
        line (str): the offending line
        reason (str): human readable details
    """

    def __init__(self, kind: ErrorKind, lineno: int, line: str, reason: str = ""):
        self.kind = kind
        self.lineno = lineno
        self.line = line
        self.reason = reason
        message = f"line {lineno}: {kind.value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class Hierarchy(enum.Enum):
    VENDOR = "vendor"
    CLASS = "class"


class _State:
    """Cursors of a single parse call"""

    __slots__ = ["active", "vendor", "device", "klass", "subclass", "vendors", "classes"]

    def __init__(self):
        self.active: Optional[Hierarchy] = None
        self.vendor: Optional[Vendor] = None
        self.device: Optional[Device] = None
        self.klass: Optional[Class] = None
        self.subclass: Optional[SubClass] = None
        self.vendors: dict[int, Vendor] = {}
        self.classes: dict[int, Class] = {}


def is_skippable(line: str) -> bool:
    """True for blank and comment only lines"""
    text = line.strip()
    return not text or text.startswith("#")


def strip_comment(text: str) -> str:
    """Removes a trailing inline comment and surrounding whitespace"""
    return INLINE_COMMENT_RE.sub("", text).strip()


def _body(lineno: int, line: str, depth: int) -> str:
    body = line[depth:]
    if depth > MAX_DEPTH:
        raise ParseError(ErrorKind.MALFORMED_INDENTATION, lineno, line, f"depth {depth} > {MAX_DEPTH}")
    if body[:1].isspace():
        raise ParseError(ErrorKind.MALFORMED_INDENTATION, lineno, line, "indentation must only use tabs")
    return body


def _fields(body: str, n: int) -> tuple[list[str], str]:
    """Split n identifier fields from body. Returns identifiers and the name"""
    fields = strip_comment(body).split(None, n)
    idents, rest = fields[:n], fields[n:]
    return idents, rest[0].strip() if rest else ""


def _ids(lineno: int, line: str, idents: list[str], n: int, width: int) -> list[int]:
    if len(idents) < n:
        raise ParseError(ErrorKind.MALFORMED_IDENTIFIER, lineno, line, f"expected {n} identifier(s)")
    result = []
    for ident in idents:
        value = parse_hex(ident, width)
        if value is None:
            raise ParseError(
                ErrorKind.MALFORMED_IDENTIFIER, lineno, line, f"{ident!r} is not a {width} digit hexadecimal id"
            )
        result.append(value)
    return result


def _parse_top(state: _State, lineno: int, line: str, body: str):
    token = body.split(None, 1)[0]
    if token == CLASS_MARKER:
        idents, name = _fields(body[len(CLASS_MARKER) :], 1)
        (cid,) = _ids(lineno, line, idents, 1, CLASS_ID_WIDTH)
        klass = Class(cid, name)
        state.classes.pop(cid, None)
        state.classes[cid] = klass
        state.active = Hierarchy.CLASS
        state.klass, state.subclass = klass, None
    elif is_hex(token):
        idents, name = _fields(body, 1)
        (vid,) = _ids(lineno, line, idents, 1, VENDOR_ID_WIDTH)
        vendor = Vendor(vid, name)
        state.vendors.pop(vid, None)
        state.vendors[vid] = vendor
        state.active = Hierarchy.VENDOR
        state.vendor, state.device = vendor, None
    else:
        raise ParseError(ErrorKind.UNRECOGNIZED_LINE, lineno, line)


def _parse_child(state: _State, lineno: int, line: str, body: str, depth: int):
    if state.active is Hierarchy.VENDOR:
        if depth == 1:
            idents, name = _fields(body, 1)
            (did,) = _ids(lineno, line, idents, 1, VENDOR_ID_WIDTH)
            state.device = Device(did, name)
            state.vendor._insert(state.device)
        elif state.device is None:
            raise ParseError(ErrorKind.ORPHANED_ENTRY, lineno, line, "subsystem without device")
        else:
            idents, name = _fields(body, 2)
            svid, sdid = _ids(lineno, line, idents, 2, VENDOR_ID_WIDTH)
            state.device._insert(Subsystem(SubsystemKey(svid, sdid), name))
    elif state.active is Hierarchy.CLASS:
        if depth == 1:
            idents, name = _fields(body, 1)
            (sid,) = _ids(lineno, line, idents, 1, CLASS_ID_WIDTH)
            state.subclass = SubClass(sid, name)
            state.klass._insert(state.subclass)
        elif state.subclass is None:
            raise ParseError(ErrorKind.ORPHANED_ENTRY, lineno, line, "programming interface without subclass")
        else:
            idents, name = _fields(body, 1)
            (pid,) = _ids(lineno, line, idents, 1, CLASS_ID_WIDTH)
            state.subclass._insert(ProgInterface(pid, name))
    else:
        raise ParseError(ErrorKind.ORPHANED_ENTRY, lineno, line, "no vendor or class declared before")


def parse(lines: Iterable[str], vendors: bool = True, classes: bool = True) -> Database:
    """
    Build a database from the lines of a pci.ids file.

    Parsing stops at the first error: either a complete database is
    returned or ParseError is raised.

    Args:
        lines: the text lines (trailing new line characters are ignored)
        vendors (bool): keep the vendor tree (default: True)
        classes (bool): keep the class tree (default: True)

    Returns:
        Database: the vendor and class tables

    Raises:
        ParseError: on the first malformed line
    """
    state = _State()
    for lineno, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if is_skippable(line):
            continue
        depth = len(line) - len(line.lstrip("\t"))
        body = _body(lineno, line, depth)
        if depth == 0:
            _parse_top(state, lineno, line, body)
        else:
            _parse_child(state, lineno, line, body, depth)
    log.debug("parsed %d vendors and %d classes", len(state.vendors), len(state.classes))
    return Database(
        state.vendors if vendors else None,
        state.classes if classes else None,
    )
