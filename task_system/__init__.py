"""Task management backend: JWT auth, task ownership and worker assignment."""

__version__ = "1.0.0"
