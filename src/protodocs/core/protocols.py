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

"""
Core protocols for the documentation plugin.

Renderers are structural: anything with a matching ``render`` method can be
plugged into a DocSession, no inheritance required.
"""

from typing import Protocol, Sequence, runtime_checkable

from protodocs.models import FileDoc


@runtime_checkable
class Renderer(Protocol):
    """
    Protocol for turning the accumulated document tree into output text.

    Implementations:
    - JsonRenderer: raw mode, the tree as a JSON array
    - TemplateRenderer: the tree fed to a Jinja2 template
    """

    def render(self, files: Sequence[FileDoc]) -> str:
        """
        Render all files of the batch.

        Args:
            files: FileDoc list in batch order

        Returns:
            str: Complete content of the output file

        Raises:
            RenderError / SerializationError on failure
        """
        ...
