#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import collections.abc
import os
import pathlib
import typing

TypeAlias = typing.TypeAlias
Union = typing.Union
Optional = typing.Optional
PathLike = Union[str, pathlib.Path, os.PathLike]


Iterable = collections.abc.Iterable
Iterator = collections.abc.Iterator
Generator = typing.Generator
Sequence = collections.abc.Sequence
Mapping = collections.abc.Mapping
NamedTuple = typing.NamedTuple
