"""
Controller Tests

Tests for nearest-idle-lift selection and dispatcher queue draining.
"""
