"""
Provides txfinger version information.
"""

# This file is auto-generated! Do not edit!
# Use `python -m incremental.update txfinger` to change this file.

from incremental import Version

__version__ = Version("txfinger", 24, 10, 0)
__all__ = ["__version__"]
