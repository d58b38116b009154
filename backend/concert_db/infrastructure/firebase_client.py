"""
Firebase Admin client for the Realtime Database.
Separated from the concert helpers so tests can swap the reference factory.

The app is initialised with a service account and a databaseAuthVariableOverride
uid, so every request is evaluated by the Security Rules as that uid.
"""

import json
import threading
from typing import Optional

import firebase_admin
from firebase_admin import credentials, db

from concert_db.core.config import get_settings
from concert_db.core.errors import ConfigurationError
from concert_db.core.logging import get_logger
from concert_db.core.metrics import firebase_app_initialized

logger = get_logger(__name__)


class FirebaseClient:
    """Singleton Firebase Admin app bound to the concerts database."""

    _app: Optional[firebase_admin.App] = None
    # Helpers reach get_app from worker threads as well as the event loop
    _lock = threading.Lock()

    @classmethod
    def get_app(cls) -> firebase_admin.App:
        """Get or create the Firebase app instance."""
        if cls._app is None:
            with cls._lock:
                if cls._app is None:
                    cls._app = cls._initialize_app()
        return cls._app

    @staticmethod
    def _initialize_app() -> firebase_admin.App:
        settings = get_settings()
        if not settings.FIREBASE_SERVICE_ACCOUNT_KEY or not settings.FIREBASE_AUTH_UID:
            raise ConfigurationError("Missing required environment variables for DB")

        try:
            service_account = json.loads(settings.FIREBASE_SERVICE_ACCOUNT_KEY)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON: {e}"
            ) from e

        app = firebase_admin.initialize_app(
            credentials.Certificate(service_account),
            {
                "databaseURL": settings.FIREBASE_DB_URL,
                "databaseAuthVariableOverride": {"uid": settings.FIREBASE_AUTH_UID},
            },
            name=settings.FIREBASE_APP_NAME,
        )
        firebase_app_initialized.set(1)
        logger.info("firebase_app_initialized", database_url=settings.FIREBASE_DB_URL)
        return app

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._app is not None

    @classmethod
    def reference(cls, path: str) -> db.Reference:
        return db.reference(path, app=cls.get_app())

    @classmethod
    def close(cls):
        """Delete the Firebase app and release its HTTP sessions."""
        with cls._lock:
            if cls._app is None:
                return
            firebase_admin.delete_app(cls._app)
            cls._app = None
        firebase_app_initialized.set(0)
        logger.info("firebase_app_deleted")


def get_reference(path: str) -> db.Reference:
    """Get a database reference for path."""
    return FirebaseClient.reference(path)
