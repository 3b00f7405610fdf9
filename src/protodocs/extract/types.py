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

"""Display labels for field types"""

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

UNKNOWN_TYPE = '<unknown>'
DATE_TYPE = 'time'

# Scalar kinds collapsed into the four documented buckets
SCALAR_TYPE_NAMES = {
    FieldDescriptorProto.TYPE_BOOL: 'bool',
    FieldDescriptorProto.TYPE_BYTES: 'string',
    FieldDescriptorProto.TYPE_STRING: 'string',
    FieldDescriptorProto.TYPE_DOUBLE: 'float',
    FieldDescriptorProto.TYPE_FLOAT: 'float',
    FieldDescriptorProto.TYPE_FIXED32: 'int',
    FieldDescriptorProto.TYPE_FIXED64: 'int',
    FieldDescriptorProto.TYPE_INT32: 'int',
    FieldDescriptorProto.TYPE_INT64: 'int',
    FieldDescriptorProto.TYPE_SFIXED32: 'int',
    FieldDescriptorProto.TYPE_SFIXED64: 'int',
    FieldDescriptorProto.TYPE_SINT32: 'int',
    FieldDescriptorProto.TYPE_SINT64: 'int',
    FieldDescriptorProto.TYPE_UINT32: 'int',
    FieldDescriptorProto.TYPE_UINT64: 'int',
}

REFERENCE_TYPES = {
    FieldDescriptorProto.TYPE_MESSAGE,
    FieldDescriptorProto.TYPE_GROUP,
    FieldDescriptorProto.TYPE_ENUM,
}


def short_type_name(type_name: str) -> str:
    """'.pkg.Outer.Inner' -> 'Inner'"""
    return type_name.rsplit('.', 1)[-1]


class TypeFormatter:
    """
    Map a field declaration to its display type.

    Message and enum references become links to '#<Name>' anchors. Scalar
    types are plain words unless ``scalar_types_url`` is set, in which case
    they link there as well.
    """

    def __init__(self, scalar_types_url: str = '', type_link_base: str = ''):
        self.scalar_types_url = scalar_types_url
        self.type_link_base = type_link_base

    def _scalar(self, name: str) -> str:
        if not self.scalar_types_url:
            return name
        return f'<a href="{self.scalar_types_url}">{name}</a>'

    def _reference(self, name: str) -> str:
        return f'<a href="{self.type_link_base}#{name}">{name}</a>'

    def base_label(self, field: FieldDescriptorProto) -> str:
        if field.type in REFERENCE_TYPES:
            return self._reference(short_type_name(field.type_name))
        # Anything named like a date is documented as a time, whatever its wire type
        if 'date' in field.name:
            return self._scalar(DATE_TYPE)
        name = SCALAR_TYPE_NAMES.get(field.type)
        if name is None:
            return UNKNOWN_TYPE
        return self._scalar(name)

    def format(self, field: FieldDescriptorProto) -> str:
        label = self.base_label(field)
        if field.label == FieldDescriptorProto.LABEL_OPTIONAL:
            return label + '?'
        if field.label == FieldDescriptorProto.LABEL_REPEATED:
            return f"{self._scalar('array')} of {label}"
        return label
