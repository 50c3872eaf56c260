"""
Upstream page fetching.
"""

from .http_client import FetchResponse, HttpClient

__all__ = ["FetchResponse", "HttpClient"]
