"""Shared pytest fixtures."""

import pytest

from formgen import update_config


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the module-level configuration around every test."""
    defaults = dict(template_dir="", default_template="", default_prefix="", default_method="post")
    update_config(**defaults)
    yield
    update_config(**defaults)
