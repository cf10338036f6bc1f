"""Shared logging and configuration utilities."""
