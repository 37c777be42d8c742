#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import pytest

from pciids.ids import Class, Device, ProgInterface, SubClass, Subsystem, SubsystemKey, Vendor
from pciids.parser import ErrorKind, ParseError, PciIdsError, is_skippable, parse, strip_comment

SIMPLE = """\
8086  Intel Corporation
\t1234  Some Device
\t\t8086 0001  Some Subsystem
C 03  Display controller
\t00  VGA compatible controller
"""

PCI_IDS = """\
#
#\tList of PCI ID's
#
# Version: 2025.01.01
# Date:    2025-01-01 03:15:01
#

# Vendors, devices and subsystems. Please keep sorted.

0e11  Compaq Computer Corporation
\t0001  PCI to EISA Bridge
\tae10  Smart-2/P RAID Controller
\t\t0e11 4030  Smart-2/P Array Controller
\t\t0e11 4031  Smart-2SL Array Controller
8086  Intel Corporation
\t1229  82557/8/9/0/1 Ethernet Pro 100
\t\t0e11 3001  82559 Fast Ethernet LOM with Alert on LAN*
\t\t8086 0001  EtherExpress PRO/100B (TX)
\t\t1028 009b  PowerEdge 2500/2550
10de  NVIDIA Corporation
\t0001  Vanta [NV6]

# List of known device classes, subclasses and programming interfaces

# Syntax:
# C class\tclass_name
#\tsubclass\tsubclass_name  \t\t<-- single tab
#\t\tprog-if  prog-if_name  \t<-- two tabs

C 01  Mass storage controller
\t01  IDE interface
\t\t00  ISA Compatibility mode-only controller
\t\t80  ISA Compatibility mode-only controller, supports bus mastering
\t06  SATA controller
\t\t01  AHCI 1.0
C 03  Display controller
\t00  VGA compatible controller
\t\t00  VGA controller
\t\t01  8514 controller
\t80  Display controller
"""


def test_parse_simple():
    db = parse(SIMPLE.splitlines())
    assert list(db.vendors) == [0x8086]
    assert list(db.classes) == [0x03]

    intel = db.vendors[0x8086]
    assert isinstance(intel, Vendor)
    assert intel.id == 0x8086
    assert intel.name == "Intel Corporation"

    device = intel[0x1234]
    assert isinstance(device, Device)
    assert device.name == "Some Device"
    assert device is intel.devices[0x1234]

    subsystem = device[SubsystemKey(0x8086, 0x0001)]
    assert isinstance(subsystem, Subsystem)
    assert subsystem.name == "Some Subsystem"
    assert subsystem.subvendor_id == 0x8086
    assert subsystem.subdevice_id == 0x0001

    display = db.classes[0x03]
    assert isinstance(display, Class)
    assert display.name == "Display controller"
    assert isinstance(display[0x00], SubClass)
    assert display.subclasses[0x00].name == "VGA compatible controller"
    assert len(display[0x00]) == 0


def test_parse_accepts_newlines():
    assert parse(SIMPLE.splitlines(keepends=True)) == parse(SIMPLE.splitlines())
    assert parse(SIMPLE.replace("\n", "\r\n").splitlines(keepends=True)) == parse(SIMPLE.splitlines())


def test_parse_full_sample():
    db = parse(PCI_IDS.splitlines())
    assert list(db.vendors) == [0x0E11, 0x8086, 0x10DE]
    assert list(db.classes) == [0x01, 0x03]

    compaq = db.vendors[0x0E11]
    assert list(compaq) == [0x0001, 0xAE10]
    assert list(compaq[0xAE10]) == [SubsystemKey(0x0E11, 0x4030), SubsystemKey(0x0E11, 0x4031)]

    intel = db.vendors[0x8086]
    assert len(intel[0x1229]) == 3
    assert intel[0x1229][SubsystemKey(0x1028, 0x009B)].name == "PowerEdge 2500/2550"

    storage = db.classes[0x01]
    assert list(storage) == [0x01, 0x06]
    interface = storage[0x06][0x01]
    assert isinstance(interface, ProgInterface)
    assert interface.name == "AHCI 1.0"
    assert db.classes[0x03][0x80].name == "Display controller"


def test_parse_empty():
    db = parse([])
    assert not db.vendors
    assert not db.classes

    db = parse(["", "# only a comment", "   ", "\t# indented comment"])
    assert not db.vendors
    assert not db.classes


def test_ids_are_case_insensitive():
    db = parse(["ABCD  Upper", "\tEF01  Device", "C 0A  Docking station", "\tFf  Other"])
    assert db.vendors[0xABCD][0xEF01].name == "Device"
    assert db.classes[0x0A][0xFF].name == "Other"


def test_scoped_device_ids():
    text = """\
1000  Vendor A
\t0001  Device of A
2000  Vendor B
\t0001  Device of B
"""
    db = parse(text.splitlines())
    assert db.vendors[0x1000][0x0001].name == "Device of A"
    assert db.vendors[0x2000][0x0001].name == "Device of B"


def test_inline_comments_are_stripped():
    text = """\
8086  Intel Corporation  # the big one
\t1234  Some Device\t# a device
\t\t8086 0001  Some Subsystem # sub
C 03  Display controller # class
\t00  VGA compatible controller #
\t\t00  VGA controller  ### many
"""
    db = parse(text.splitlines())
    assert db.vendors[0x8086].name == "Intel Corporation"
    assert db.vendors[0x8086][0x1234].name == "Some Device"
    assert db.vendors[0x8086][0x1234][SubsystemKey(0x8086, 0x0001)].name == "Some Subsystem"
    assert db.classes[0x03].name == "Display controller"
    assert db.classes[0x03][0x00].name == "VGA compatible controller"
    assert db.classes[0x03][0x00][0x00].name == "VGA controller"


def test_hash_inside_name_is_kept():
    db = parse(["1234  Name#1"])
    assert db.vendors[0x1234].name == "Name#1"


def test_empty_names():
    db = parse(["8086", "\t1234   ", "\t\t8086 0001", "C 03", "\t00  # no name"])
    assert db.vendors[0x8086].name == ""
    assert db.vendors[0x8086][0x1234].name == ""
    assert db.vendors[0x8086][0x1234][SubsystemKey(0x8086, 0x0001)].name == ""
    assert db.classes[0x03].name == ""
    assert db.classes[0x03][0x00].name == ""


def test_comments_and_blanks_do_not_change_result():
    lines = SIMPLE.splitlines()
    noisy = []
    for line in lines:
        noisy += ["", "# comment", line, "\t# indented comment", "   ", "\t\t"]
    assert parse(noisy) == parse(lines)

    # comments in the middle of a hierarchy do not close it
    db = parse(noisy)
    assert db.vendors[0x8086][0x1234][SubsystemKey(0x8086, 0x0001)].name == "Some Subsystem"


def test_last_write_wins():
    text = """\
0001  VendorA
\t0010  Device A
0002  Other
0001  VendorB
\t0020  Device B
\t0020  Device B2
C 03  Display
C 03  Display controller
"""
    db = parse(text.splitlines())
    vendor = db.vendors[0x0001]
    assert vendor.name == "VendorB"
    assert list(vendor) == [0x0020]
    assert vendor[0x0020].name == "Device B2"
    # the surviving entry takes the place of its last declaration
    assert list(db.vendors) == [0x0002, 0x0001]
    assert db.classes[0x03].name == "Display controller"


def test_interleaved_hierarchies():
    text = """\
1000  Vendor A
\t0001  Device A1
C 03  Display controller
\t00  VGA compatible controller
\t\t00  VGA controller
2000  Vendor B
\t0001  Device B1
\t\t1000 0005  Made by A
C 02  Network controller
\t00  Ethernet controller
"""
    db = parse(text.splitlines())
    assert list(db.vendors) == [0x1000, 0x2000]
    assert list(db.classes) == [0x03, 0x02]
    assert list(db.vendors[0x1000]) == [0x0001]
    assert db.vendors[0x2000][0x0001][SubsystemKey(0x1000, 0x0005)].name == "Made by A"
    assert list(db.classes[0x03]) == [0x00]
    assert db.classes[0x03][0x00][0x00].name == "VGA controller"
    assert db.classes[0x02][0x00].name == "Ethernet controller"

    alone = parse(["C 03  Display controller", "\t00  VGA compatible controller", "\t\t00  VGA controller"])
    assert alone.classes[0x03] == db.classes[0x03]


def test_parse_only_vendors_or_classes():
    db = parse(PCI_IDS.splitlines(), classes=False)
    assert len(db.vendors) == 3
    assert not db.classes

    db = parse(PCI_IDS.splitlines(), vendors=False)
    assert not db.vendors
    assert len(db.classes) == 2


@pytest.mark.parametrize(
    "lines, kind, lineno",
    [
        (["8086  Intel", "\t1234  Device", "\t\t\t0001  Too deep"], ErrorKind.MALFORMED_INDENTATION, 3),
        (["\t\t\t0001  Too deep"], ErrorKind.MALFORMED_INDENTATION, 1),
        (["C 03  Display", "\t\t\t00  Too deep"], ErrorKind.MALFORMED_INDENTATION, 2),
        (["8086  Intel", "    1234  Spaces"], ErrorKind.MALFORMED_INDENTATION, 2),
        (["8086  Intel", "\t 1234  Mixed"], ErrorKind.MALFORMED_INDENTATION, 2),
        ([" 8086  Intel"], ErrorKind.MALFORMED_INDENTATION, 1),
        (["808  Intel"], ErrorKind.MALFORMED_IDENTIFIER, 1),
        (["80866  Intel"], ErrorKind.MALFORMED_IDENTIFIER, 1),
        (["8086  Intel", "\t12g4  Device"], ErrorKind.MALFORMED_IDENTIFIER, 2),
        (["8086  Intel", "\t1234  Device", "\t\t8086  Missing subdevice"], ErrorKind.MALFORMED_IDENTIFIER, 3),
        (["8086  Intel", "\t1234  Device", "\t\t8086 01  Short"], ErrorKind.MALFORMED_IDENTIFIER, 3),
        (["C 003  Display"], ErrorKind.MALFORMED_IDENTIFIER, 1),
        (["C"], ErrorKind.MALFORMED_IDENTIFIER, 1),
        (["C 03  Display", "\t0  VGA"], ErrorKind.MALFORMED_IDENTIFIER, 2),
        (["C 03  Display", "\t00  VGA", "\t\tzz  Bad"], ErrorKind.MALFORMED_IDENTIFIER, 3),
        (["\t1234  Device"], ErrorKind.ORPHANED_ENTRY, 1),
        (["\t\t8086 0001  Subsystem"], ErrorKind.ORPHANED_ENTRY, 1),
        (["8086  Intel", "\t\t8086 0001  Subsystem"], ErrorKind.ORPHANED_ENTRY, 2),
        (["C 03  Display", "\t\t00  VGA"], ErrorKind.ORPHANED_ENTRY, 2),
        (["8086  Intel", "\t1234  Device", "C 03  Display", "\t\t00  VGA"], ErrorKind.ORPHANED_ENTRY, 4),
        (["X 03  Unknown marker"], ErrorKind.UNRECOGNIZED_LINE, 1),
        (["# header", "", "HID  Usage"], ErrorKind.UNRECOGNIZED_LINE, 3),
    ],
)
def test_parse_errors(lines, kind, lineno):
    with pytest.raises(ParseError) as error:
        parse(lines)
    assert error.value.kind is kind
    assert error.value.lineno == lineno
    assert error.value.line == lines[lineno - 1]
    assert str(error.value).startswith(f"line {lineno}: {kind.value}")


def test_parse_fails_fast():
    lines = ["8086  Intel", "808  Bad", "\t\t\t0001  Too deep"]
    with pytest.raises(PciIdsError) as error:
        parse(lines)
    assert error.value.lineno == 2
    assert error.value.kind is ErrorKind.MALFORMED_IDENTIFIER


def test_parse_consumes_generators():
    def gen():
        yield from SIMPLE.splitlines()

    assert parse(gen()) == parse(SIMPLE.splitlines())


def test_is_skippable():
    assert is_skippable("")
    assert is_skippable("   ")
    assert is_skippable("\t\t")
    assert is_skippable("# comment")
    assert is_skippable("\t\t# comment")
    assert not is_skippable("8086  Intel")
    assert not is_skippable("\t1234  Device")


def test_strip_comment():
    assert strip_comment("Intel Corporation") == "Intel Corporation"
    assert strip_comment("  Intel Corporation  # comment") == "Intel Corporation"
    assert strip_comment("Name#1") == "Name#1"
    assert strip_comment(" # only comment") == ""
