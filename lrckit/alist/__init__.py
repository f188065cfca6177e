"""
AList module for LRCKit.

Provides the HTTP client used to browse an AList server and download
audio and caption files.
"""

from .client import AListClient, AListError

__all__ = [
    'AListClient',
    'AListError',
]
