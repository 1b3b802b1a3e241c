"""Shared library code: errors, logging and terminal output."""
