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

"""Built-in template registry"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from loguru import logger

from protodocs.errors import SourceReadError

TEMPLATES_DIR = Path(__file__).parent.parent / 'templates'
TEMPLATE_SUFFIX = '.jinja'


@dataclass(frozen=True)
class TemplateSource:
    """
    A template ready to be compiled.

    Attributes:
        name: Identifier used in error messages (format name or file path)
        source: Template text
        search_path: Extra directory for resolving includes, if any
    """
    name: str
    source: str
    search_path: Optional[str] = None


def supported_formats() -> List[str]:
    """Names of the bundled templates; files starting with '_' are partials"""
    return sorted(
        p.stem for p in TEMPLATES_DIR.glob(f'*{TEMPLATE_SUFFIX}')
        if not p.name.startswith('_')
    )


def usage() -> str:
    return (
        f"Usage: --doc_out={'|'.join(supported_formats())}|<TEMPLATE_FILENAME>,"
        f"<OUT_FILENAME>[,no-exclude]:<OUT_DIR>"
    )


def read_template(name: str) -> TemplateSource:
    """
    Load a bundled format by name, or any other name as a template file path.

    Raises:
        SourceReadError: The template file cannot be read
    """
    if name in supported_formats():
        path = TEMPLATES_DIR / f'{name}{TEMPLATE_SUFFIX}'
        search_path = None
    else:
        path = Path(name)
        search_path = str(path.parent)

    try:
        source = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise SourceReadError(f"{path}: {reason}") from e

    logger.debug(f"Loaded template {name} from {path}")
    return TemplateSource(name=name, source=source, search_path=search_path)
