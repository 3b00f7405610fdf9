"""
Tests for the batch session and the plugin entry point
"""
import json

import pytest
from google.protobuf.compiler import plugin_pb2

from protodocs.core.session import DocSession
from protodocs.errors import ConfigurationError
from protodocs.main import generate, main
from proto_factory import FD, add_comment, add_field, add_message, new_file, write_proto


def request_for(parameter, *file_protos):
    request = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    for file_proto in file_protos:
        request.proto_file.add().CopyFrom(file_proto)
        request.file_to_generate.append(file_proto.name)
    return request


def user_file():
    file_proto = new_file('user.proto', 'acme')
    user = add_message(file_proto, 'User')
    add_field(user, 'name', FD.TYPE_STRING)
    add_field(user, 'created_date', FD.TYPE_INT64, FD.LABEL_REPEATED)
    add_comment(file_proto, [4, 0], leading='* A user.\n')
    return file_proto


@pytest.fixture
def batch_root(proto_root):
    write_proto(proto_root, 'user.proto', '/// Users.\nsyntax = "proto2";\n')
    write_proto(proto_root, 'hidden.proto', '/// @exclude\nsyntax = "proto2";\n')
    return proto_root


class TestDocSession:

    def test_lifecycle(self, settings, batch_root):
        session = DocSession(settings)
        session.begin_batch('json,doc.json')
        session.process_file(user_file())
        session.process_file(new_file('hidden.proto'))
        output = session.end_batch()

        assert output.name == 'doc.json'
        assert [f.name for f in session.files] == ['user.proto']
        document = json.loads(output.content)
        assert document[0]['file_description'] == 'Users.'
        fields = document[0]['file_messages'][0]['message_fields']
        assert [f['field_type'] for f in fields] == ['array of time', 'string?']

    def test_no_exclude_parameter(self, settings, batch_root):
        session = DocSession(settings)
        session.begin_batch('json,doc.json,no-exclude')
        session.process_file(new_file('hidden.proto'))
        assert [f.name for f in session.files] == ['hidden.proto']

    def test_out_of_order_calls(self, settings):
        session = DocSession(settings)
        with pytest.raises(RuntimeError):
            session.process_file(new_file())
        with pytest.raises(RuntimeError):
            session.end_batch()

        session.begin_batch('json,doc.json')
        with pytest.raises(RuntimeError):
            session.begin_batch('json,doc.json')

        session.end_batch()
        with pytest.raises(RuntimeError):
            session.end_batch()
        with pytest.raises(RuntimeError):
            session.process_file(new_file())

    def test_bad_parameter(self, settings):
        session = DocSession(settings)
        with pytest.raises(ConfigurationError):
            session.begin_batch('json')
        assert session.parameter is None


class TestGenerate:

    def test_json_output(self, settings, batch_root):
        response = generate(request_for('json,doc.json', user_file(), new_file('hidden.proto')), settings)

        assert not response.error
        assert [f.name for f in response.file] == ['doc.json']
        assert [f['file_name'] for f in json.loads(response.file[0].content)] == ['user.proto']

    def test_template_output(self, settings, batch_root):
        response = generate(request_for('markdown,api.md', user_file()), settings)

        assert not response.error
        assert response.file[0].name == 'api.md'
        assert '### User' in response.file[0].content
        assert 'A user.' in response.file[0].content

    def test_configuration_error_before_any_file(self, settings):
        # The proto file does not exist, so only the parameter can be reported
        response = generate(request_for('html', new_file('absent.proto')), settings)

        assert response.error.startswith('Usage: --doc_out=')
        assert len(response.file) == 0

    def test_missing_source_file(self, settings):
        response = generate(request_for('json,doc.json', new_file('absent.proto')), settings)

        assert response.error.startswith('absent.proto: ')
        assert len(response.file) == 0

    def test_render_error(self, settings, batch_root):
        (batch_root / 'bad.jinja').write_text('{% for %}', encoding='utf-8')
        response = generate(request_for(f"{batch_root / 'bad.jinja'},out.txt", user_file()), settings)

        assert response.error.startswith(f"{batch_root / 'bad.jinja'}:1: ")
        assert len(response.file) == 0

    def test_python_error_in_template(self, settings, batch_root):
        (batch_root / 'zero.jinja').write_text('{{ 1 / 0 }}', encoding='utf-8')
        response = generate(request_for(f"{batch_root / 'zero.jinja'},out.txt", user_file()), settings)

        assert response.error == f"{batch_root / 'zero.jinja'}:1: division by zero"
        assert len(response.file) == 0

    def test_file_to_generate_missing_from_request(self, settings):
        request = plugin_pb2.CodeGeneratorRequest(parameter='json,doc.json')
        request.file_to_generate.append('ghost.proto')

        response = generate(request, settings)

        assert response.error.startswith('ghost.proto: ')
        assert len(response.file) == 0

    def test_supports_proto3_optional(self, settings, batch_root):
        response = generate(request_for('json,doc.json', user_file()), settings)
        assert response.supported_features & plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL


class TestMain:

    def test_request_file(self, tmp_path, batch_root, capsysbinary, monkeypatch):
        monkeypatch.setenv('PROTODOCS_PROTO_ROOT', str(batch_root))
        request_path = tmp_path / 'request.bin'
        request_path.write_bytes(request_for('json,doc.json', user_file()).SerializeToString())

        assert main(['--request', str(request_path)]) == 0

        response = plugin_pb2.CodeGeneratorResponse.FromString(capsysbinary.readouterr().out)
        assert not response.error
        assert [f.name for f in response.file] == ['doc.json']

    def test_unreadable_request_file(self, tmp_path, capsysbinary):
        missing = tmp_path / 'missing.bin'

        assert main(['--request', str(missing)]) == 1

        response = plugin_pb2.CodeGeneratorResponse.FromString(capsysbinary.readouterr().out)
        assert response.error.startswith(f"{missing}: ")
        assert len(response.file) == 0
