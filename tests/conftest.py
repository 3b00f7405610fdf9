import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from protodocs.config import AppConfig
from proto_factory import write_proto


@pytest.fixture
def proto_root(tmp_path):
    """Directory holding an 'example.proto' without a file comment"""
    write_proto(tmp_path, 'example.proto')
    return tmp_path


@pytest.fixture
def settings(proto_root):
    return AppConfig(PROTO_ROOT=str(proto_root))
