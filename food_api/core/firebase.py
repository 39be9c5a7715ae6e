"""
Food API — Firebase clients

Built once in the application lifespan and kept on app.state, never as
module globals, so tests can put fakes in their place.
"""
import logging
from dataclasses import dataclass

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore import AsyncClient

from food_api.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class FirebaseClients:
    app: firebase_admin.App
    firestore: AsyncClient


def init_firebase(settings: Settings) -> FirebaseClients:
    """Initialise a named Firebase app from the service account JSON."""
    cred = credentials.Certificate(settings.service_account_info)
    fb_app = firebase_admin.initialize_app(cred, name=settings.SERVICE_NAME)
    logger.info("Firebase app initialised for project %s", fb_app.project_id)
    return FirebaseClients(app=fb_app, firestore=firestore_async.client(fb_app))


def close_firebase(clients: FirebaseClients) -> None:
    firebase_admin.delete_app(clients.app)
