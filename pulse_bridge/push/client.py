# pulse_bridge/push/client.py
from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, db, exceptions, firestore, messaging

from ..config import Settings
from ..exceptions import CredentialError
from ..logger import get_logger
from ..models.push import PushPayload, PushReceipt, PushTarget

log = get_logger("push")


def load_service_account(path: str) -> Dict[str, Any]:
    """
    Read and validate a service-account key file.
    Raises CredentialError if the file is missing, unreadable or not a
    service-account document.
    """
    p = Path(path)
    if not p.is_file():
        log.error(f"Service account file not found at {path}")
        log.error("Please create a service account key file and place it in the correct location")
        raise CredentialError(f"Service account file not found at {path}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CredentialError(f"Service account file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict) or data.get("type") != "service_account":
        raise CredentialError(f"{path} is not a service account credential")
    return data


class PushClient:
    """
    Cloud messaging sender bound to its own named firebase_admin app.
    Construct it with from_settings(); construction either succeeds fully or
    raises CredentialError.
    """

    def __init__(self, app: firebase_admin.App, project_id: Optional[str] = None):
        self.app = app
        self.project_id = project_id

    @classmethod
    def from_settings(cls, settings: Settings, name: Optional[str] = None) -> "PushClient":
        service_account = load_service_account(settings.FIREBASE_SERVICE_ACCOUNT_PATH)
        try:
            cred = credentials.Certificate(service_account)
        except ValueError as e:
            raise CredentialError(f"Invalid service account credential: {e}") from e

        options: Dict[str, Any] = {"httpTimeout": settings.FIREBASE_HTTP_TIMEOUT_S}
        if settings.FIREBASE_DATABASE_URL:
            options["databaseURL"] = settings.FIREBASE_DATABASE_URL
        app = firebase_admin.initialize_app(
            cred, options, name=name or f"{settings.SERVICE_NAME}-{uuid.uuid4().hex[:8]}"
        )

        log.info("Firebase Admin SDK initialized successfully")
        log.info(f"Project ID: {cred.project_id}")
        log.info(f"Using database URL: {settings.FIREBASE_DATABASE_URL}")
        return cls(app, project_id=cred.project_id)

    def build_message(self, target: PushTarget, payload: PushPayload) -> messaging.Message:
        return messaging.Message(
            notification=messaging.Notification(title=payload.title, body=payload.body),
            data=dict(payload.data) or None,
            token=target.token,
            topic=target.topic,
        )

    def send(self, target: PushTarget, payload: PushPayload) -> PushReceipt:
        message = self.build_message(target, payload)
        dest = f"token={target.token}" if target.token else f"topic={target.topic}"
        try:
            message_id = messaging.send(message, app=self.app)
        except (exceptions.FirebaseError, ValueError) as e:
            log.warning(f"Push to {dest} failed: {e}")
            return PushReceipt(ok=False, error=str(e))
        log.info(f"Push to {dest} sent: message_id={message_id}")
        return PushReceipt(ok=True, message_id=message_id)

    def database(self, path: str = "/") -> db.Reference:
        """Realtime Database reference on this app; needs FIREBASE_DATABASE_URL."""
        return db.reference(path, app=self.app)

    def firestore(self):
        return firestore.client(app=self.app)

    def close(self) -> None:
        if self.app is None:
            return
        firebase_admin.delete_app(self.app)
        self.app = None
