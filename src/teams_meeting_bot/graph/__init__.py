"""
Microsoft Graph integration package.

Provides app-only token acquisition and a REST client for the
onlineMeetings, transcripts and communications/calls endpoints.
"""

from .client import GraphApiClient
from .credentials import GraphTokenProvider

__all__ = [
    "GraphApiClient",
    "GraphTokenProvider",
]
