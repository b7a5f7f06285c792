"""Clients for external backends."""

from .firestore import FirestoreStore, handle_firestore_operation

__all__ = ["FirestoreStore", "handle_firestore_operation"]
