"""Domain models for profiles and form controls."""

from .models import FormField, Profile, SelectOption

__all__ = [
    "Profile",
    "FormField",
    "SelectOption",
]
