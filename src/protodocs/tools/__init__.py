"""
Helpers over protoc descriptor data
"""
