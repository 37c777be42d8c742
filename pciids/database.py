#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
In memory pci.ids database and the lookups over it.

A [`Database`][pciids.database.Database] is built once (usually by
[`pciids.parser.parse`][pciids.parser.parse]) and never changes afterwards,
so it can be shared between threads without any locking.

All lookups are exact matches on every id of the chain. An unknown id is
not an error: the lookup simply returns None.

```python
db = pciids.load()
info = db.lookup_device(0x8086, 0x1234)
if info is None:
    print("unknown device")
else:
    print(f"{info.vendor_name} {info.name}")
```
"""

import types

from .ids import Class, Device, ProgInterface, SubClass, Subsystem, SubsystemKey, Vendor
from .types import Iterable, Mapping, NamedTuple, Optional, TypeAlias

VendorTable: TypeAlias = Mapping[int, Vendor]
ClassTable: TypeAlias = Mapping[int, Class]


class VendorInfo(NamedTuple):
    name: str


class DeviceInfo(NamedTuple):
    name: str
    vendor_name: str


class SubsystemInfo(NamedTuple):
    name: str
    subsystem_vendor_name: Optional[str]


class ClassInfo(NamedTuple):
    name: str


class SubclassInfo(NamedTuple):
    name: str
    class_name: str


class ProgInterfaceInfo(NamedTuple):
    name: str


class Database:
    """
    Vendor and class tables of a pci.ids file

    Attributes:
        vendors (Mapping[int, Vendor]): vendors by id, in file order
        classes (Mapping[int, Class]): device classes by id, in file order
    """

    __slots__ = ["_vendors", "_classes"]

    def __init__(self, vendors: Optional[VendorTable] = None, classes: Optional[ClassTable] = None):
        self._vendors = types.MappingProxyType(dict(vendors or {}))
        self._classes = types.MappingProxyType(dict(classes or {}))

    def __repr__(self):
        return f"{type(self).__name__}(vendors={len(self._vendors)}, classes={len(self._classes)})"

    def __eq__(self, other):
        if not isinstance(other, Database):
            return NotImplemented
        return dict(self._vendors) == dict(other._vendors) and dict(self._classes) == dict(other._classes)

    __hash__ = None

    @property
    def vendors(self) -> VendorTable:
        return self._vendors

    @property
    def classes(self) -> ClassTable:
        return self._classes

    def iter_vendors(self) -> Iterable[Vendor]:
        """Returns an iterator over all vendors, in file order"""
        return iter(self._vendors.values())

    def iter_classes(self) -> Iterable[Class]:
        """Returns an iterator over all device classes, in file order"""
        return iter(self._classes.values())

    # Entry getters

    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        return self._vendors.get(vendor_id)

    def get_device(self, vendor_id: int, device_id: int) -> Optional[Device]:
        if (vendor := self._vendors.get(vendor_id)) is None:
            return None
        return vendor.get(device_id)

    def get_subsystem(
        self, vendor_id: int, device_id: int, subsystem_vendor_id: int, subsystem_device_id: int
    ) -> Optional[Subsystem]:
        if (device := self.get_device(vendor_id, device_id)) is None:
            return None
        return device.get(SubsystemKey(subsystem_vendor_id, subsystem_device_id))

    def get_class(self, class_id: int) -> Optional[Class]:
        return self._classes.get(class_id)

    def get_subclass(self, class_id: int, subclass_id: int) -> Optional[SubClass]:
        if (klass := self._classes.get(class_id)) is None:
            return None
        return klass.get(subclass_id)

    def get_programming_interface(self, class_id: int, subclass_id: int, interface_id: int) -> Optional[ProgInterface]:
        if (subclass := self.get_subclass(class_id, subclass_id)) is None:
            return None
        return subclass.get(interface_id)

    # Lookups

    def lookup_vendor(self, vendor_id: int) -> Optional[VendorInfo]:
        """Name of the given vendor or None if the vendor is unknown"""
        if (vendor := self.get_vendor(vendor_id)) is None:
            return None
        return VendorInfo(vendor.name)

    def lookup_device(self, vendor_id: int, device_id: int) -> Optional[DeviceInfo]:
        """
        Name of the device together with its vendor name.

        Returns None if the vendor is unknown or if the vendor does not
        declare the device.
        """
        if (vendor := self.get_vendor(vendor_id)) is None:
            return None
        if (device := vendor.get(device_id)) is None:
            return None
        return DeviceInfo(device.name, vendor.name)

    def lookup_subsystem(
        self, vendor_id: int, device_id: int, subsystem_vendor_id: int, subsystem_device_id: int
    ) -> Optional[SubsystemInfo]:
        """
        Name of a subsystem of the given device together with the name of the
        subsystem manufacturer.

        The manufacturer is looked up in the vendor table on its own: when
        *subsystem_vendor_id* is not a known vendor the subsystem name is
        still returned with `subsystem_vendor_name` set to None.
        """
        subsystem = self.get_subsystem(vendor_id, device_id, subsystem_vendor_id, subsystem_device_id)
        if subsystem is None:
            return None
        subvendor = self.get_vendor(subsystem_vendor_id)
        return SubsystemInfo(subsystem.name, None if subvendor is None else subvendor.name)

    def lookup_class(self, class_id: int) -> Optional[ClassInfo]:
        """Name of the given device class or None if the class is unknown"""
        if (klass := self.get_class(class_id)) is None:
            return None
        return ClassInfo(klass.name)

    def lookup_subclass(self, class_id: int, subclass_id: int) -> Optional[SubclassInfo]:
        """Name of the subclass together with its class name"""
        if (klass := self.get_class(class_id)) is None:
            return None
        if (subclass := klass.get(subclass_id)) is None:
            return None
        return SubclassInfo(subclass.name, klass.name)

    def lookup_programming_interface(
        self, class_id: int, subclass_id: int, interface_id: int
    ) -> Optional[ProgInterfaceInfo]:
        if (interface := self.get_programming_interface(class_id, subclass_id, interface_id)) is None:
            return None
        return ProgInterfaceInfo(interface.name)
