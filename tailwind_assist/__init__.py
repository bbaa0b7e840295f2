"""Tailwind CSS class-name completion and class browser for code editors."""
