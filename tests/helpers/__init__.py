"""Test helper utilities for formfill tests."""

from .form_builders import make_input, make_select

__all__ = ["make_input", "make_select"]
