"""Segments for composing a shell prompt: text, shell, clock, git, path, session, OS and media."""

__version__ = "0.1.0"