"""
Core interfaces module for shici search.

This module provides access to all core interfaces used throughout
the application.
"""

from .client_interface import (
    TransportInterface,
    IdValidatorInterface
)

__all__ = [
    'TransportInterface',
    'IdValidatorInterface'
]
