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
protoc-gen-doc - documentation generator plugin for protoc

protoc starts the plugin, writes a CodeGeneratorRequest to its stdin and reads
a CodeGeneratorResponse from its stdout.
"""
import sys
import argparse
from typing import Optional
from google.protobuf.compiler import plugin_pb2
from loguru import logger

from protodocs import __version__
from protodocs import config
from protodocs.core.session import DocSession
from protodocs.errors import ProtoDocsError, SourceReadError
from protodocs.render import supported_formats


def init_logger(log_level: str = "WARNING", log_file: str = "", max_size: str = "10 MB"):
    """Initialize logger with stderr and optional file output (stdout carries the response)"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        colorize=True,
    )
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            rotation=max_size,
            retention="7 days",
            encoding="utf-8",
        )


def generate(request: plugin_pb2.CodeGeneratorRequest,
             settings: Optional[config.AppConfig] = None) -> plugin_pb2.CodeGeneratorResponse:
    """
    Document every file protoc asked for and build the response.

    Failures are reported through the response error field, in which case
    the response carries no file.
    """
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    files_by_name = {f.name: f for f in request.proto_file}
    session = DocSession(settings)
    try:
        session.begin_batch(request.parameter)
        for name in request.file_to_generate:
            if name not in files_by_name:
                raise SourceReadError(f"{name}: not present in the request")
            session.process_file(files_by_name[name])
        output = session.end_batch()
    except ProtoDocsError as e:
        logger.error(f"Documentation generation failed: {e}")
        response.error = str(e)
        return response

    response.file.add(name=output.name, content=output.content)
    return response


def write_response(response: plugin_pb2.CodeGeneratorResponse):
    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.buffer.flush()


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(
        prog='protoc-gen-doc',
        description='Documentation generator plugin for protoc',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render the bundled HTML template
  protoc --doc_out=html,index.html:docs *.proto

  # Dump the document tree as JSON, ignoring @exclude
  protoc --doc_out=json,doc.json,no-exclude:docs *.proto

  # Use a custom template
  protoc --doc_out=my_template.jinja,api.md:docs *.proto
        """
    )

    parser.add_argument(
        '--list-formats',
        action='store_true',
        help='Print the names of the bundled templates and exit'
    )

    parser.add_argument(
        '--request',
        type=str,
        default=None,
        help='Read a serialized CodeGeneratorRequest from this file instead of stdin'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args(argv)

    settings = config.reload_config()
    init_logger(settings.LOG_LEVEL, settings.LOG_FILE)

    if args.list_formats:
        print('\n'.join(supported_formats()))
        return 0

    request = plugin_pb2.CodeGeneratorRequest()
    if args.request:
        try:
            with open(args.request, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.error(f"Cannot read request: {e}")
            write_response(plugin_pb2.CodeGeneratorResponse(error=f"{args.request}: {e.strerror or e}"))
            return 1
    else:
        data = sys.stdin.buffer.read()

    request.ParseFromString(data)
    logger.info(f"Request: {len(request.file_to_generate)} files, parameter '{request.parameter}'")

    write_response(generate(request, settings))
    return 0


if __name__ == '__main__':
    sys.exit(main())
