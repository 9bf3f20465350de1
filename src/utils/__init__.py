"""Shared helpers for prompts and formatting."""
