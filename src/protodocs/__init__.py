"""
protodocs - documentation generator plugin for protoc
"""

__version__ = '1.0.0'
