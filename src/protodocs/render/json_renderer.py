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

"""JsonRenderer: Dump the document tree as JSON"""

import json
from typing import Sequence
from loguru import logger

from protodocs.errors import SerializationError
from protodocs.models import FileDoc


class JsonRenderer:
    """Raw mode renderer (implements Renderer protocol)"""

    def __init__(self, indent: int = 4):
        self.indent = indent

    def render(self, files: Sequence[FileDoc]) -> str:
        try:
            document = json.dumps(
                [f.to_dict() for f in files],
                ensure_ascii=False,
                indent=self.indent,
                sort_keys=True,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to create JSON document: {e}") from e

        logger.debug(f"JSON document: {len(files)} files, {len(document)} chars")
        return document + '\n'
