"""Test containers."""

from .container import TEST_DATABASE_URL, build_test_container, make_test_settings

__all__ = [
    "TEST_DATABASE_URL",
    "build_test_container",
    "make_test_settings",
]
