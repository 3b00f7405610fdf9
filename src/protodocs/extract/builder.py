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

"""DocModelBuilder: Build the document tree of one .proto file"""

from pathlib import PurePosixPath
from typing import List, Optional, Tuple
from google.protobuf import descriptor_pb2
from loguru import logger

from protodocs.extract.comments import Description, file_description, node_description
from protodocs.extract.types import TypeFormatter
from protodocs.models import EnumDoc, EnumValueDoc, FieldDoc, FileDoc, MessageDoc
from protodocs.tools.source_locations import (
    ENUM_VALUE,
    FILE_ENUM_TYPE,
    FILE_MESSAGE_TYPE,
    MESSAGE_ENUM_TYPE,
    MESSAGE_FIELD,
    MESSAGE_NESTED_TYPE,
    SourceLocations,
)

Path = Tuple[int, ...]


class DocModelBuilder:
    """
    Walk a FileDescriptorProto and produce its FileDoc.

    Declarations whose description starts with ``@exclude`` are dropped
    together with everything declared inside them. Nested messages and enums
    are lifted into the file's flat lists: a message comes before its nested
    messages, and enums nested in messages come before top-level enums.
    """

    def __init__(
        self,
        type_formatter: Optional[TypeFormatter] = None,
        no_exclude: bool = False,
        proto_root: Optional[str] = None,
    ):
        self.type_formatter = type_formatter or TypeFormatter()
        self.no_exclude = no_exclude
        self.proto_root = proto_root

    def build(self, file_proto: descriptor_pb2.FileDescriptorProto) -> Optional[FileDoc]:
        """
        Build the document of a file, or None if the file is excluded.

        Raises:
            SourceReadError: The file cannot be read for its file-level comment
        """
        description = file_description(file_proto.name, self.no_exclude, self.proto_root)
        if description.excluded:
            logger.debug(f"Excluded file: {file_proto.name}")
            return None

        locations = SourceLocations(file_proto)
        messages: List[MessageDoc] = []
        enums: List[EnumDoc] = []

        for i, message in enumerate(file_proto.message_type):
            self._add_messages(message, (FILE_MESSAGE_TYPE, i), locations, messages, enums)
        for i, enum in enumerate(file_proto.enum_type):
            self._add_enum(enum, (FILE_ENUM_TYPE, i), locations, enums)

        logger.debug(f"Built {file_proto.name}: {len(messages)} messages, {len(enums)} enums")
        return FileDoc(
            name=PurePosixPath(file_proto.name).name,
            description=description.text,
            package=file_proto.package,
            messages=tuple(messages),
            enums=tuple(enums),
        )

    def _describe(self, locations: SourceLocations, path: Path) -> Description:
        leading, trailing = locations.comments(path)
        return node_description(leading, trailing, self.no_exclude)

    def _add_messages(
        self,
        message: descriptor_pb2.DescriptorProto,
        path: Path,
        locations: SourceLocations,
        messages: List[MessageDoc],
        enums: List[EnumDoc],
    ) -> None:
        """Add the message, then its nested messages and enums"""
        description = self._describe(locations, path)
        if description.excluded:
            logger.debug(f"Excluded message: {message.name}")
            return

        fields = []
        for i, field in enumerate(message.field):
            field_doc = self._build_field(field, path + (MESSAGE_FIELD, i), locations)
            if field_doc is not None:
                fields.append(field_doc)
        fields.sort(key=lambda f: f.name)

        messages.append(MessageDoc(name=message.name, description=description.text, fields=tuple(fields)))

        for i, nested in enumerate(message.nested_type):
            self._add_messages(nested, path + (MESSAGE_NESTED_TYPE, i), locations, messages, enums)
        for i, enum in enumerate(message.enum_type):
            self._add_enum(enum, path + (MESSAGE_ENUM_TYPE, i), locations, enums)

    def _build_field(
        self,
        field: descriptor_pb2.FieldDescriptorProto,
        path: Path,
        locations: SourceLocations,
    ) -> Optional[FieldDoc]:
        description = self._describe(locations, path)
        if description.excluded:
            logger.debug(f"Excluded field: {field.name}")
            return None
        return FieldDoc(name=field.name, description=description.text, type=self.type_formatter.format(field))

    def _add_enum(
        self,
        enum: descriptor_pb2.EnumDescriptorProto,
        path: Path,
        locations: SourceLocations,
        enums: List[EnumDoc],
    ) -> None:
        description = self._describe(locations, path)
        if description.excluded:
            logger.debug(f"Excluded enum: {enum.name}")
            return

        values = []
        for i, value in enumerate(enum.value):
            value_description = self._describe(locations, path + (ENUM_VALUE, i))
            if value_description.excluded:
                continue
            values.append(EnumValueDoc(name=value.name, number=value.number, description=value_description.text))
        values.sort(key=lambda v: v.name)

        enums.append(EnumDoc(name=enum.name, description=description.text, values=tuple(values)))
