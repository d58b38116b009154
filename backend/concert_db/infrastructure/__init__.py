"""
Infrastructure layer - external system integrations.
Keeps the concert helpers clean from Firebase setup details.
"""

from .firebase_client import get_reference, FirebaseClient

__all__ = ['get_reference', 'FirebaseClient']
