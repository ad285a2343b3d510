"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Product payload validation

==============================================================================
"""

from .validators import ProductValidator

__all__ = [
    "ProductValidator",
]
