#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Human friendly access to the PCI ID repository (pci.ids).

```python
import pciids

db = pciids.load()  # /usr/share/hwdata/pci.ids or similar
print(db.lookup_vendor(0x8086))
print(db.lookup_subclass(0x03, 0x00))
```
"""

from .database import (
    ClassInfo,
    Database,
    DeviceInfo,
    ProgInterfaceInfo,
    SubclassInfo,
    SubsystemInfo,
    VendorInfo,
)
from .ids import Class, Device, DeviceClass, ProgInterface, SubClass, Subsystem, SubsystemKey, Vendor
from .loader import DEFAULT_PATH, PATHS, default, find_path, iter_lines, load
from .parser import ErrorKind, ParseError, PciIdsError, parse

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PATH",
    "PATHS",
    "Class",
    "ClassInfo",
    "Database",
    "Device",
    "DeviceClass",
    "DeviceInfo",
    "ErrorKind",
    "ParseError",
    "PciIdsError",
    "ProgInterface",
    "ProgInterfaceInfo",
    "SubClass",
    "SubclassInfo",
    "Subsystem",
    "SubsystemInfo",
    "SubsystemKey",
    "Vendor",
    "VendorInfo",
    "default",
    "find_path",
    "iter_lines",
    "load",
    "parse",
]
