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

"""
Comment lookup over ``SourceCodeInfo``.

protoc identifies every declaration by a path of field numbers and indices
into ``FileDescriptorProto`` (e.g. ``[4, 0, 2, 1]`` is the second field of the
first top-level message). The constants below are those field numbers.
"""

from typing import Dict, Sequence, Tuple
from google.protobuf import descriptor_pb2

# FileDescriptorProto
FILE_MESSAGE_TYPE = 4
FILE_ENUM_TYPE = 5

# DescriptorProto
MESSAGE_FIELD = 2
MESSAGE_NESTED_TYPE = 3
MESSAGE_ENUM_TYPE = 4

# EnumDescriptorProto
ENUM_VALUE = 2

Path = Tuple[int, ...]


class SourceLocations:
    """Leading/trailing comments of a file's declarations, keyed by path"""

    def __init__(self, file_proto: descriptor_pb2.FileDescriptorProto):
        self._locations: Dict[Path, descriptor_pb2.SourceCodeInfo.Location] = {}
        for location in file_proto.source_code_info.location:
            # First location wins, protoc may emit extra spans for one path
            self._locations.setdefault(tuple(location.path), location)

    def comments(self, path: Sequence[int]) -> Tuple[str, str]:
        """Return (leading, trailing) comments, empty strings when unknown"""
        location = self._locations.get(tuple(path))
        if location is None:
            return '', ''
        return location.leading_comments, location.trailing_comments
