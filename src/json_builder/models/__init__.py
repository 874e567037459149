"""Data models for the JSON Builder."""

from .shape import Shape

__all__ = ["Shape"]
