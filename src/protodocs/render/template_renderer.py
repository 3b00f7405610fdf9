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

"""TemplateRenderer: Render the document tree through a Jinja2 template"""

import traceback
from typing import Dict, Optional, Sequence, Tuple
from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateSyntaxError,
)
from loguru import logger

from protodocs.errors import RenderError
from protodocs.models import FileDoc
from protodocs.render.filters import FILTERS
from protodocs.render.templates import TEMPLATES_DIR, TemplateSource

# Filename Jinja2 compiles templates under when the loader reports none
_UNNAMED_TEMPLATE = '<template>'


class _TrackingLoader(BaseLoader):
    """Delegating loader that remembers which file backs which template name"""

    def __init__(self, loader: BaseLoader):
        self.loader = loader
        self.names: Dict[str, str] = {}

    def get_source(self, environment, template):
        source, filename, uptodate = self.loader.get_source(environment, template)
        self.names[filename or _UNNAMED_TEMPLATE] = template
        return source, filename, uptodate


class TemplateRenderer:
    """
    Template mode renderer (implements Renderer protocol).

    The main template is registered under its own name; includes resolve
    against the external template's directory first, then the bundled
    templates. Autoescaping is off: type labels carry link markup.
    """

    def __init__(self, template: TemplateSource):
        self.template = template

        loaders = [DictLoader({template.name: template.source})]
        if template.search_path:
            loaders.append(FileSystemLoader(template.search_path))
        loaders.append(FileSystemLoader(str(TEMPLATES_DIR)))
        self._loader = _TrackingLoader(ChoiceLoader(loaders))

        self.environment = Environment(
            loader=self._loader,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.environment.filters.update(FILTERS)

    def render(self, files: Sequence[FileDoc]) -> str:
        context = {'files': [f.to_dict() for f in files]}
        try:
            result = self.environment.get_template(self.template.name).render(context)
        except Exception as e:
            # Filters and expressions raise plain Python errors at run time
            raise RenderError(self._format_error(e)) from e

        logger.debug(f"Rendered {self.template.name}: {len(result)} chars")
        return result

    def _error_location(self, error: Exception) -> Tuple[Optional[str], int]:
        """Return (template name, line) where the error happened"""
        if isinstance(error, TemplateSyntaxError):
            return error.name, error.lineno
        # Jinja2 rewrites tracebacks so template lines show up as frames
        for frame in reversed(traceback.extract_tb(error.__traceback__)):
            name = self._loader.names.get(frame.filename)
            if name is not None:
                return name, frame.lineno or 0
        return None, 0

    def _format_error(self, error: Exception) -> str:
        """Single-line '<template>[ in partial <name>]:<line>: <message>'"""
        name, line = self._error_location(error)
        location = self.template.name
        if name is not None and name != self.template.name:
            location += f" in partial {name}"
        message = ' '.join(str(getattr(error, 'message', None) or error).split())
        return f"{location}:{line}: {message}"
