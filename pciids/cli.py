#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import argparse
import logging
import sys

from pciids.database import Database
from pciids.loader import find_path, load
from pciids.parser import ParseError
from pciids.util import hex_id, parse_hex_path

log = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

FOUND, MISS, ERROR = 0, 1, 2


def id_path(*widths, partial=False):
    """argparse type decoding colon separated hex ids like 8086:1234"""

    def decode(text):
        result = parse_hex_path(text, widths)
        if not partial and len(result) != len(widths):
            raise ValueError(f"Expected {len(widths)} identifier(s) in {text!r}")
        return result

    decode.__name__ = ":".join(width * "X" for width in widths)
    return decode


def vendor(db: Database, args) -> int:
    (vid,) = args.vendor
    info = db.lookup_vendor(vid)
    if info is None:
        print(f"{hex_id(vid)} unknown vendor")
        return MISS
    print(f"{hex_id(vid)} {info.name}")
    return FOUND


def device(db: Database, args) -> int:
    vid, did = args.device
    key = f"{hex_id(vid)}:{hex_id(did)}"
    info = db.lookup_device(vid, did)
    if info is None:
        print(f"{key} unknown device")
        return MISS
    print(f"{key} {info.vendor_name} {info.name}")
    return FOUND


def subsystem(db: Database, args) -> int:
    vid, did = args.device
    svid, sdid = args.subsystem
    key = f"{hex_id(vid)}:{hex_id(did)} {hex_id(svid)}:{hex_id(sdid)}"
    info = db.lookup_subsystem(vid, did, svid, sdid)
    if info is None:
        print(f"{key} unknown subsystem")
        return MISS
    manufacturer = info.subsystem_vendor_name or "unknown vendor"
    print(f"{key} {info.name} ({manufacturer})")
    return FOUND


def klass(db: Database, args) -> int:
    ids = args.klass
    key = ":".join(hex_id(i, 2) for i in ids)
    if len(ids) == 1:
        info = db.lookup_class(*ids)
        text = None if info is None else info.name
    elif len(ids) == 2:
        info = db.lookup_subclass(*ids)
        text = None if info is None else f"{info.class_name} / {info.name}"
    else:
        subclass = db.lookup_subclass(*ids[:2])
        info = db.lookup_programming_interface(*ids)
        text = None if info is None else f"{subclass.class_name} / {subclass.name} / {info.name}"
    if text is None:
        print(f"{key} unknown class")
        return MISS
    print(f"{key} {text}")
    return FOUND


def ls(db: Database, args) -> int:
    if args.classes:
        for item in db.iter_classes():
            print(f"{hex_id(item.id, 2)}  {item.name}")
    else:
        for item in db.iter_vendors():
            print(f"{hex_id(item.id)}  {item.name}")
    return FOUND


COMMANDS = {
    "vendor": vendor,
    "device": device,
    "subsystem": subsystem,
    "class": klass,
    "ls": ls,
}


def cli():
    parser = argparse.ArgumentParser(prog="pciids", description="PCI ID database lookup")
    parser.add_argument("--ids", help=f"pci.ids file (default: {find_path() or 'system file'})", default=None)
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", type=str.upper)
    sub_parsers = parser.add_subparsers(
        title="sub-commands", description="valid sub-commands", help="select one command", required=True, dest="command"
    )
    cmd = sub_parsers.add_parser("vendor", help="vendor name")
    cmd.add_argument("vendor", help="vendor id (ex: 8086)", type=id_path(4))
    cmd = sub_parsers.add_parser("device", help="device name")
    cmd.add_argument("device", help="vendor:device (ex: 8086:1234)", type=id_path(4, 4))
    cmd = sub_parsers.add_parser("subsystem", help="subsystem name")
    cmd.add_argument("device", help="vendor:device (ex: 8086:1234)", type=id_path(4, 4))
    cmd.add_argument("subsystem", help="subvendor:subdevice (ex: 1028:0001)", type=id_path(4, 4))
    cmd = sub_parsers.add_parser("class", help="device class name")
    cmd.add_argument(
        "klass", metavar="class", help="class[:subclass[:prog-if]] (ex: 03:00:00)", type=id_path(2, 2, 2, partial=True)
    )
    cmd = sub_parsers.add_parser("ls", help="list vendors (or classes)")
    cmd.add_argument("--classes", action="store_true", help="list device classes instead of vendors")
    return parser


def needs_classes(args) -> bool:
    return args.command == "class" or (args.command == "ls" and args.classes)


def run(args) -> int:
    classes = needs_classes(args)
    try:
        db = load(args.ids, vendors=not classes, classes=classes)
    except (ParseError, OSError) as error:
        log.debug("Failed to load database", exc_info=True)
        print(f"pciids: {error}", file=sys.stderr)
        return ERROR
    return COMMANDS[args.command](db, args)


def main(args=None) -> int:
    parser = cli()
    args = parser.parse_args(args=args)
    logging.basicConfig(level=args.log_level)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
