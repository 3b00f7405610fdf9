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

"""Error types reported back to protoc"""


class ProtoDocsError(Exception):
    """Base class for every failure that aborts a generation batch"""


class ConfigurationError(ProtoDocsError):
    """Malformed plugin parameter string"""


class SourceReadError(ProtoDocsError):
    """A .proto source or an external template could not be read"""


class RenderError(ProtoDocsError):
    """Template execution failed (including failures inside partials)"""


class SerializationError(ProtoDocsError):
    """The document tree could not be serialized to JSON"""
