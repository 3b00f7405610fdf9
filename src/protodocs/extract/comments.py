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
Doc comment extraction.

Two comment dialects are recognised as documentation:

    /// Line comments with a third slash

    /**
     * Block comments opened with a double star
     */

For declarations, protoc already hands over the comment bodies without the
``//`` / ``/*`` delimiters, so the extra ``/`` or ``*`` is the only marker left
to tell a doc comment from a plain one. File-level comments have no source
location and are scanned from the file itself.
"""

import re
from pathlib import Path
from typing import Iterable, NamedTuple, Optional
from loguru import logger

from protodocs.errors import SourceReadError

EXCLUDE_DIRECTIVE = '@exclude'

_DOC_MARKERS = ('*', '/')
_LEADING_SPACE = re.compile(r'^ ', re.MULTILINE)


class Description(NamedTuple):
    text: str
    excluded: bool


def _clean_doc_comment(comment: str) -> str:
    """Return the doc comment body, or '' for a plain comment"""
    if not comment.startswith(_DOC_MARKERS):
        return ''
    return _LEADING_SPACE.sub('', comment[1:])


def apply_exclude(description: str, no_exclude: bool) -> Description:
    """Trim the description and handle a leading @exclude directive"""
    description = description.strip()
    if description.startswith(EXCLUDE_DIRECTIVE):
        return Description(description[len(EXCLUDE_DIRECTIVE):].strip(), not no_exclude)
    return Description(description, False)


def node_description(leading: str, trailing: str, no_exclude: bool = False) -> Description:
    """
    Build the description of a message, enum, enum value or field.

    The description is the leading doc comment followed by the trailing doc
    comment, each with one leading space removed from every line.

    Args:
        leading: Leading comment as reported by protoc
        trailing: Trailing comment as reported by protoc
        no_exclude: Ignore @exclude directives (the token is still removed)
    """
    return apply_exclude(_clean_doc_comment(leading) + _clean_doc_comment(trailing), no_exclude)


def _strip_star(line: str) -> str:
    if line.startswith('* '):
        return line[2:]
    if line.startswith('*'):
        return line[1:]
    return line


def scan_file_comment(lines: Iterable[str]) -> str:
    """
    Extract the comment block at the top of a file.

    Only the first non-blank line decides: a run of ``///`` lines or a
    ``/** ... */`` block is returned without its markers, anything else yields
    an empty description.
    """
    stream = (line.strip() for line in lines)
    for line in stream:
        if not line:
            continue

        if line.startswith('///'):
            collected = []
            while line is not None and line.startswith('///'):
                collected.append(line[4:] if line.startswith('/// ') else line[3:])
                line = next(stream, None)
            return '\n'.join(collected)

        if line.startswith('/**') and not line.startswith('/***/'):
            # Keep the second star so the opening line is cleaned like the others
            line = line[2:]
            collected = []
            while line is not None and '*/' not in line:
                collected.append(_strip_star(line) + '\n')
                line = next(stream, None)
            if line is not None:
                end = line.index('*/')
                start = 0 if line.startswith('*/') else len(line) - len(_strip_star(line))
                collected.append(line[start:end] if start <= end else '')
            return ''.join(collected)

        return ''
    return ''


def file_description(file_name: str, no_exclude: bool = False,
                     proto_root: Optional[str] = None) -> Description:
    """
    Build the description of a .proto file from its leading comment block.

    Args:
        file_name: Proto file name as known to protoc (relative to proto_root)
        no_exclude: Ignore @exclude directives
        proto_root: Directory the file name is resolved against

    Raises:
        SourceReadError: The file cannot be opened or read
    """
    path = Path(proto_root or '.') / file_name
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            description = scan_file_comment(f)
    except OSError as e:
        raise SourceReadError(f"{file_name}: {e.strerror or e}") from e

    logger.debug(f"File comment of {file_name}: {len(description)} chars")
    return apply_exclude(description, no_exclude)
