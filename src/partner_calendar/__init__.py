"""
Shared calendar service.

Users create events grouped into daily periods, share them with invited
partners at varying privacy levels, and collaborate through comments
and reactions.
"""

__version__ = "0.1.0"
