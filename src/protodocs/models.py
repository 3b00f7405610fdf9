#!/usr/bin/env python3
# Copyright 2021-present StarRocks, Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Document tree models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class FieldDoc:
    """A message field with its display-ready type label"""
    name: str
    description: str
    type: str  # May contain hyperlink markup

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field_name': self.name,
            'field_description': self.description,
            'field_type': self.type,
        }


@dataclass(frozen=True)
class EnumValueDoc:
    name: str
    number: int
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value_name': self.name,
            'value_number': self.number,
            'value_description': self.description,
        }


@dataclass(frozen=True)
class EnumDoc:
    """
    Enum documentation.

    Attributes:
        name: Enum short name
        description: Cleaned doc comment
        values: Values sorted by name
    """
    name: str
    description: str
    values: Tuple[EnumValueDoc, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'enum_name': self.name,
            'enum_description': self.description,
            'enum_values': [v.to_dict() for v in self.values],
        }


@dataclass(frozen=True)
class MessageDoc:
    """
    Message documentation.

    Nested messages and enums are not kept here; the builder lifts them into
    the owning file's lists.

    Attributes:
        name: Message short name
        description: Cleaned doc comment
        fields: Non-excluded fields sorted by name
    """
    name: str
    description: str
    fields: Tuple[FieldDoc, ...] = field(default_factory=tuple)

    @property
    def has_fields(self) -> bool:
        return len(self.fields) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message_name': self.name,
            'message_description': self.description,
            'message_has_fields': self.has_fields,
            'message_fields': [f.to_dict() for f in self.fields],
        }


@dataclass(frozen=True)
class FileDoc:
    """
    Documentation for one .proto file.

    Attributes:
        name: File basename (e.g. 'user.proto')
        description: File-level doc comment
        package: Proto package name
        messages: All messages of the file, nested ones flattened in
        enums: All enums of the file, nested ones first
    """
    name: str
    description: str
    package: str
    messages: Tuple[MessageDoc, ...] = field(default_factory=tuple)
    enums: Tuple[EnumDoc, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file_name': self.name,
            'file_description': self.description,
            'file_package': self.package,
            'file_messages': [m.to_dict() for m in self.messages],
            'file_enums': [e.to_dict() for e in self.enums],
        }
