"""Shared constants, exceptions and helpers."""
