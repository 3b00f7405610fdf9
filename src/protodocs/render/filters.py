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
Text filters available to templates.

Both work as expression filters and as filter blocks; in block form Jinja2
renders the enclosed content before the filter sees it:

    {{ message.message_description | p }}
    {% filter nobr %}{{ field.field_description }}{% endfilter %}
"""

import re

_PARAGRAPH_BREAK = re.compile(r'(?:\n|\r|\r\n)\s*(?:\n|\r|\r\n)')


def paragraphs(text) -> str:
    """Wrap blank-line separated paragraphs in <p>..</p>"""
    return '<p>' + '</p><p>'.join(_PARAGRAPH_BREAK.split(str(text))) + '</p>'


def no_line_breaks(text) -> str:
    """Remove every \\r\\n, \\r and \\n, in that order"""
    return str(text).replace('\r\n', '').replace('\r', '').replace('\n', '')


FILTERS = {
    'p': paragraphs,
    'nobr': no_line_breaks,
}
