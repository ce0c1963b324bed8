"""Tyto - markdown knowledge base synced from a git repository"""

__version__ = "0.1.0"
