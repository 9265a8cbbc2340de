"""
API package for WaterX Admin
"""

from .client import ApiClient, ApiError

__all__ = ['ApiClient', 'ApiError']
