"""
Extraction: doc comments, type labels and the document tree builder
"""

from protodocs.extract.builder import DocModelBuilder
from protodocs.extract.comments import Description, file_description, node_description
from protodocs.extract.types import TypeFormatter

__all__ = [
    'DocModelBuilder',
    'Description',
    'TypeFormatter',
    'file_description',
    'node_description',
]
