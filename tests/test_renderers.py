"""
Tests for JSON and template rendering
"""
import json

import pytest

from protodocs.errors import RenderError, SerializationError, SourceReadError
from protodocs.models import EnumDoc, EnumValueDoc, FieldDoc, FileDoc, MessageDoc
from protodocs.render import JsonRenderer, TemplateRenderer, TemplateSource, read_template, supported_formats, usage
from protodocs.render.filters import no_line_breaks, paragraphs


@pytest.fixture
def files():
    user = MessageDoc(
        name='User',
        description='A user.\n\nSecond paragraph.',
        fields=(
            FieldDoc('id', 'Identifier.', 'int'),
            FieldDoc('role', 'Line one\nline two', '<a href="#Role">Role</a>?'),
        ),
    )
    empty = MessageDoc(name='Empty', description='')
    role = EnumDoc('Role', 'Roles.', (EnumValueDoc('ADMIN', 1, 'Admin.'), EnumValueDoc('GUEST', 0, '')))
    return [
        FileDoc('user.proto', 'Users.', 'acme', (user, empty), (role,)),
        FileDoc('other.proto', '', '', (MessageDoc('Ping', '', (FieldDoc('at_date', '', 'time?'),)),), ()),
    ]


def inline(source, name='inline'):
    return TemplateRenderer(TemplateSource(name=name, source=source))


class TestFilters:

    def test_paragraphs(self):
        assert paragraphs('a\n\nb') == '<p>a</p><p>b</p>'
        assert paragraphs('a\r\n\r\nb') == '<p>a</p><p>b</p>'
        assert paragraphs('a\n  \n\n b') == '<p>a</p><p> b</p>'
        assert paragraphs('a\nb') == '<p>a\nb</p>'

    def test_no_line_breaks(self):
        assert no_line_breaks('a\r\nb\rc\nd') == 'abcd'

    def test_block_filters_render_content_first(self, files):
        renderer = inline(
            '{% filter p %}{{ files[0].file_messages[0].message_description }}{% endfilter %}|'
            '{% filter nobr %}{% for f in files[0].file_messages[0].message_fields %}'
            '{{ f.field_name }}\n{% endfor %}{% endfilter %}'
        )
        assert renderer.render(files) == '<p>A user.</p><p>Second paragraph.</p>|idrole'


class TestJsonRenderer:

    def test_document_tree(self, files):
        document = json.loads(JsonRenderer().render(files))

        assert [f['file_name'] for f in document] == ['user.proto', 'other.proto']
        user = document[0]['file_messages'][0]
        assert user['message_has_fields'] is True
        assert user['message_fields'][1] == {
            'field_name': 'role',
            'field_description': 'Line one\nline two',
            'field_type': '<a href="#Role">Role</a>?',
        }
        assert document[0]['file_messages'][1]['message_has_fields'] is False
        assert document[0]['file_enums'][0]['enum_values'][0] == {
            'value_name': 'ADMIN', 'value_number': 1, 'value_description': 'Admin.',
        }

    def test_empty_batch(self):
        assert json.loads(JsonRenderer().render([])) == []

    def test_unserializable_tree(self):
        broken = FileDoc('x.proto', object(), 'x')
        with pytest.raises(SerializationError):
            JsonRenderer().render([broken])


class TestTemplateRenderer:

    def test_counts_match_json(self, files):
        renderer = inline(
            '{{ files | length }}'
            '{% for f in files %};{{ f.file_messages | length }}/{{ f.file_enums | length }}'
            '{% for m in f.file_messages %},{{ m.message_fields | length }}{% endfor %}{% endfor %}'
        )
        document = json.loads(JsonRenderer().render(files))
        expected = str(len(document)) + ''.join(
            f";{len(f['file_messages'])}/{len(f['file_enums'])}"
            + ''.join(f",{len(m['message_fields'])}" for m in f['file_messages'])
            for f in document
        )
        assert renderer.render(files) == expected == '2;2/1,2,0;1/0,1'

    def test_markup_is_not_escaped(self, files):
        renderer = inline('{{ files[0].file_messages[0].message_fields[1].field_type }}')
        assert renderer.render(files) == '<a href="#Role">Role</a>?'

    def test_syntax_error(self, files):
        with pytest.raises(RenderError) as exc_info:
            inline('ok\n{% if %}\n', name='broken').render(files)
        message = str(exc_info.value)
        assert message.startswith('broken:2: ')
        assert '\n' not in message

    def test_error_in_partial(self, files, tmp_path):
        (tmp_path / 'main.jinja').write_text('head\n{% include "part.jinja" %}\n', encoding='utf-8')
        (tmp_path / 'part.jinja').write_text('fine\n{{ 1 + }}\n', encoding='utf-8')
        template = read_template(str(tmp_path / 'main.jinja'))

        with pytest.raises(RenderError) as exc_info:
            TemplateRenderer(template).render(files)

        assert str(exc_info.value).startswith(f"{tmp_path / 'main.jinja'} in partial part.jinja:2: ")

    def test_runtime_error(self, files):
        with pytest.raises(RenderError) as exc_info:
            inline('{{ files[0].nope.deeper }}', name='runtime').render(files)
        assert str(exc_info.value).startswith('runtime')
        assert 'nope' in str(exc_info.value)

    def test_python_error_in_expression(self, files):
        with pytest.raises(RenderError) as exc_info:
            inline('ok\n{{ 1 / 0 }}', name='math').render(files)
        assert str(exc_info.value) == 'math:2: division by zero'

    def test_type_error_in_filter_expression(self, files):
        with pytest.raises(RenderError) as exc_info:
            inline('{{ files | length + "x" }}', name='typed').render(files)
        assert str(exc_info.value).startswith('typed:1: ')

    def test_external_template_includes_sibling(self, files, tmp_path):
        (tmp_path / 'main.jinja').write_text('{% include "names.jinja" %}', encoding='utf-8')
        (tmp_path / 'names.jinja').write_text('{% for f in files %}{{ f.file_name }} {% endfor %}', encoding='utf-8')
        renderer = TemplateRenderer(read_template(str(tmp_path / 'main.jinja')))
        assert renderer.render(files) == 'user.proto other.proto '


class TestBuiltInTemplates:

    def test_supported_formats(self):
        assert supported_formats() == ['docbook', 'html', 'markdown']
        assert 'Usage: --doc_out=docbook|html|markdown|<TEMPLATE_FILENAME>,<OUT_FILENAME>[,no-exclude]' in usage()

    def test_html(self, files):
        html = TemplateRenderer(read_template('html')).render(files)
        assert '<h3 id="User">User</h3>' in html
        assert '<p>A user.</p><p>Second paragraph.</p>' in html
        assert '<td><a href="#Role">Role</a>?</td>' in html
        assert '<td>ADMIN</td><td>1</td>' in html

    def test_markdown(self, files):
        markdown = TemplateRenderer(read_template('markdown')).render(files)
        assert '### User' in markdown
        assert '| role | <a href="#Role">Role</a>? | Line oneline two |' in markdown
        assert '| at_date | time? |  |' in markdown

    def test_docbook(self, files):
        docbook = TemplateRenderer(read_template('docbook')).render(files)
        assert '<section id="Role">' in docbook
        assert '<term><literal>role</literal> (Role?)</term>' in docbook

    def test_missing_template_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            read_template(str(tmp_path / 'nope.jinja'))
