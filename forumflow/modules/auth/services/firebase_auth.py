"""Firebase ID token verification"""
import json
import logging
import os
import time
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from forumflow.core.config import Settings
from forumflow.core.errors import Forbidden, ServerError
from forumflow.modules.auth.schemas.auth import VerifiedIdentity

logger = logging.getLogger("forumflow")


class FirebaseTokenVerifier:
    """
    Verifies bearer tokens against Firebase Authentication.

    The Firebase app is initialized at startup by ``initialize()``; when
    startup did not manage it, each ``verify`` makes one more attempt.
    """

    max_attempts = 3
    retry_delay = 2  # seconds

    def __init__(self, settings: Settings):
        self.settings = settings
        self._app: Optional[firebase_admin.App] = None

    @property
    def initialized(self) -> bool:
        return self._app is not None

    def _credentials(self) -> Optional[credentials.Base]:
        if self.settings.FIREBASE_SERVICE_ACCOUNT:
            return credentials.Certificate(json.loads(self.settings.FIREBASE_SERVICE_ACCOUNT))
        service_account_path = self.settings.FIREBASE_SERVICE_ACCOUNT_PATH
        if service_account_path and os.path.exists(service_account_path):
            return credentials.Certificate(service_account_path)
        return None

    def initialize(self, attempts: Optional[int] = None) -> bool:
        """Initialize Firebase with retry mechanism"""
        if self._app is not None:
            return True

        attempts = attempts or self.max_attempts
        for attempt in range(1, attempts + 1):
            try:
                try:
                    self._app = firebase_admin.get_app()
                    return True
                except ValueError:
                    pass

                cred = self._credentials()
                if cred is not None:
                    self._app = firebase_admin.initialize_app(cred)
                    logger.info("Firebase initialized with service account")
                else:
                    self._app = firebase_admin.initialize_app()
                    logger.warning("Firebase initialized without explicit credentials")
                return True
            except (ValueError, OSError) as e:
                logger.error(f"Failed to initialize Firebase (attempt {attempt}): {e}")
                if attempt < attempts:
                    time.sleep(self.retry_delay)

        logger.error(f"Failed to initialize Firebase after {attempts} attempts")
        return False

    def verify(self, token: str) -> VerifiedIdentity:
        """Verifies a Firebase ID token and extracts the caller's identity"""
        if not self.initialized and not self.initialize(attempts=1):
            raise ServerError("Identity provider unavailable")

        try:
            decoded_token = auth.verify_id_token(token, app=self._app)
        except (auth.InvalidIdTokenError, ValueError) as e:
            logger.warning(f"Firebase token verification failed: {type(e).__name__}")
            raise Forbidden("Invalid or expired token")
        except FirebaseError as e:
            logger.error(f"Firebase verification error: {e}")
            raise ServerError("Identity provider error", details=str(e))

        logger.debug(f"Firebase token verified for user: {decoded_token.get('uid')}")
        return VerifiedIdentity(
            uid=decoded_token["uid"],
            email=decoded_token.get("email"),
            name=decoded_token.get("name"),
            picture=decoded_token.get("picture"),
        )
