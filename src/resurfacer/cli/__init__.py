"""
Resurfacer CLI - Command Line Interface for the saved-item store

Provides terminal commands for:
- Saving and removing items
- Recording review outcomes
- Moving due dates forward
- Listing saved and due items
"""

from .main import cli, main

__all__ = ["cli", "main"]
