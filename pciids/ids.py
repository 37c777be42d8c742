#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Entries of the pci.ids database.

The file describes two independent trees:

* vendors -> devices -> subsystems
* classes -> subclasses -> programming interfaces

Branch entries ([`Vendor`][pciids.ids.Vendor], [`Device`][pciids.ids.Device],
[`Class`][pciids.ids.Class], [`SubClass`][pciids.ids.SubClass]) are read-only
mappings of child id to child entry, kept in file order. Leaf entries
([`Subsystem`][pciids.ids.Subsystem], [`ProgInterface`][pciids.ids.ProgInterface])
only carry an id and a name.
"""

import enum

from .types import Iterator, Mapping, NamedTuple, Optional


class DeviceClass(enum.IntEnum):
    """Well known PCI base classes (see https://pci-ids.ucw.cz/read/PD/)"""

    UNCLASSIFIED = 0x00
    MASS_STORAGE_CONTROLLER = 0x01
    NETWORK_CONTROLLER = 0x02
    DISPLAY_CONTROLLER = 0x03
    MULTIMEDIA_CONTROLLER = 0x04
    MEMORY_CONTROLLER = 0x05
    BRIDGE = 0x06
    COMMUNICATION_CONTROLLER = 0x07
    GENERIC_SYSTEM_PERIPHERAL = 0x08
    INPUT_DEVICE_CONTROLLER = 0x09
    DOCKING_STATION = 0x0A
    PROCESSOR = 0x0B
    SERIAL_BUS_CONTROLLER = 0x0C
    WIRELESS_CONTROLLER = 0x0D
    INTELLIGENT_CONTROLLER = 0x0E
    SATELLITE_COMMUNICATIONS_CONTROLLER = 0x0F
    ENCRYPTION_CONTROLLER = 0x10
    SIGNAL_PROCESSING_CONTROLLER = 0x11
    PROCESSING_ACCELERATOR = 0x12
    NON_ESSENTIAL_INSTRUMENTATION = 0x13
    COPROCESSOR = 0x40
    UNASSIGNED = 0xFF

    def __str__(self):
        return self.name.replace("_", " ").title()

    @classmethod
    def get(cls, value: int) -> Optional["DeviceClass"]:
        """The member for the given class id or None if there is no such member"""
        try:
            return cls(value)
        except ValueError:
            return None


class SubsystemKey(NamedTuple):
    """Identity of a subsystem: manufacturer (a vendor id) and device id"""

    vendor_id: int
    device_id: int

    def __str__(self):
        return f"{self.vendor_id:04x}:{self.device_id:04x}"


class Node(Mapping):
    __slots__ = ["id", "name", "_children"]

    def __init__(self, nid, name: str):
        self.id = nid
        self.name = name
        self._children = {}

    def __getitem__(self, key):
        return self._children[key]

    def __iter__(self) -> Iterator:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r}, children={len(self)})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.id == other.id and self.name == other.name and self._children == other._children

    __hash__ = None

    def _insert(self, child: "Node | Leaf"):
        # last declaration wins and takes the position of the redeclaration
        self._children.pop(child.id, None)
        self._children[child.id] = child


class Leaf:
    __slots__ = ["id", "name"]

    def __init__(self, lid, name: str):
        self.id = lid
        self.name = name

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.id == other.id and self.name == other.name

    def __hash__(self):
        return hash((type(self), self.id, self.name))


class Subsystem(Leaf):
    __slots__ = []

    @property
    def subvendor_id(self) -> int:
        return self.id.vendor_id

    @property
    def subdevice_id(self) -> int:
        return self.id.device_id


class Device(Node):
    __slots__ = []

    @property
    def subsystems(self) -> Mapping[SubsystemKey, Subsystem]:
        return self


class Vendor(Node):
    __slots__ = []

    @property
    def devices(self) -> Mapping[int, Device]:
        return self


class ProgInterface(Leaf):
    __slots__ = []


class SubClass(Node):
    __slots__ = []

    @property
    def interfaces(self) -> Mapping[int, ProgInterface]:
        return self


class Class(Node):
    __slots__ = []

    @property
    def subclasses(self) -> Mapping[int, SubClass]:
        return self

    @property
    def device_class(self) -> Optional[DeviceClass]:
        return DeviceClass.get(self.id)
