"""
Shared utilities for the repository commands.

This module provides the base command class, authentication helpers and
CLI options used by new, publish, clone and fork.
"""

from .base_command import BaseCommand
from .auth_manager import AuthManager
from .cli_options import CommonOptions

__all__ = ["BaseCommand", "AuthManager", "CommonOptions"]
