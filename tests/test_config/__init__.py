"""
Configuration Tests

Bounds validation and YAML scenario loading.
"""
