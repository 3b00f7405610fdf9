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
Batch session for one protoc invocation.

protoc hands the plugin several files but expects a single combined output,
so the document tree is accumulated across files and rendered once:

    session = DocSession()
    session.begin_batch('html,index.html')
    for file_proto in files:
        session.process_file(file_proto)
    output = session.end_batch()
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from google.protobuf import descriptor_pb2
from loguru import logger

from protodocs import config
from protodocs.config import AppConfig, PluginParameter
from protodocs.core.protocols import Renderer
from protodocs.extract.builder import DocModelBuilder
from protodocs.extract.types import TypeFormatter
from protodocs.models import FileDoc
from protodocs.render import create_renderer, usage


@dataclass(frozen=True)
class GeneratedFile:
    name: str
    content: str


class DocSession:
    """
    Accumulates FileDocs between begin_batch() and end_batch().

    Calls out of that order are programming errors and raise RuntimeError.

    Attributes:
        settings: Process settings (links, proto root)
        parameter: Parsed plugin parameter, set by begin_batch()
        renderer: Renderer selected by the parameter
    """

    def __init__(self, settings: Optional[AppConfig] = None):
        self.settings = settings if settings is not None else config.config
        self.parameter: Optional[PluginParameter] = None
        self.renderer: Optional[Renderer] = None
        self._builder: Optional[DocModelBuilder] = None
        self._files: List[FileDoc] = []
        self._finished = False

    @property
    def files(self) -> Tuple[FileDoc, ...]:
        return tuple(self._files)

    def begin_batch(self, parameter: str) -> None:
        """
        Parse the plugin parameter and prepare the renderer.

        Raises:
            ConfigurationError: Malformed parameter string
            SourceReadError: Template file cannot be read
        """
        if self.parameter is not None:
            raise RuntimeError("begin_batch() called twice")

        parsed = PluginParameter.parse(parameter, usage())
        renderer = create_renderer(parsed)

        self.parameter = parsed
        self.renderer = renderer
        self._builder = DocModelBuilder(
            type_formatter=TypeFormatter(
                scalar_types_url=self.settings.SCALAR_TYPES_URL,
                type_link_base=self.settings.TYPE_LINK_BASE,
            ),
            no_exclude=parsed.no_exclude,
            proto_root=self.settings.PROTO_ROOT,
        )
        logger.info(
            f"Batch started | template: {parsed.template or 'json'} | "
            f"output: {parsed.output_file_name} | no-exclude: {parsed.no_exclude}"
        )

    def process_file(self, file_proto: descriptor_pb2.FileDescriptorProto) -> Optional[FileDoc]:
        """
        Build and record the document of one file.

        Returns:
            The FileDoc, or None when the whole file is excluded

        Raises:
            SourceReadError: The file cannot be read for its file-level comment
        """
        self._check_open("process_file")
        file_doc = self._builder.build(file_proto)
        if file_doc is not None:
            self._files.append(file_doc)
        logger.info(f"Processed {file_proto.name}")
        return file_doc

    def end_batch(self) -> GeneratedFile:
        """
        Render everything accumulated so far.

        Raises:
            RenderError / SerializationError on failure
        """
        self._check_open("end_batch")
        self._finished = True
        content = self.renderer.render(self._files)
        logger.info(f"Rendered {len(self._files)} files into {self.parameter.output_file_name}")
        return GeneratedFile(name=self.parameter.output_file_name, content=content)

    def _check_open(self, operation: str) -> None:
        if self.parameter is None:
            raise RuntimeError(f"{operation}() called before begin_batch()")
        if self._finished:
            raise RuntimeError(f"{operation}() called after end_batch()")
