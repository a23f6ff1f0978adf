
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
# This ensures credentials are available regardless of import order
load_dotenv()

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CREDENTIALS_PATH = os.path.join(BASE_DIR, "serviceAccountKey.json")


class Settings:
    def __init__(self):
        # Environment mode
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

        # Security / Firebase
        # Falls back to the service account key shipped next to the tool
        self.FIREBASE_CREDENTIALS_PATH = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or DEFAULT_CREDENTIALS_PATH
        self.FIREBASE_READY = False
        self._init_firebase()

    def _init_firebase(self):
        """Initialize Firebase Admin SDK if credentials available."""
        try:
            import firebase_admin
            from firebase_admin import credentials

            if firebase_admin._apps:
                # Already initialized
                self.FIREBASE_READY = True
                return

            # Look for service account credentials
            if self.FIREBASE_CREDENTIALS_PATH and os.path.exists(self.FIREBASE_CREDENTIALS_PATH):
                try:
                    cred = credentials.Certificate(self.FIREBASE_CREDENTIALS_PATH)
                    firebase_admin.initialize_app(cred)
                    self.FIREBASE_READY = True
                    logger.info("✓ Firebase Admin SDK initialized from credentials file")
                except Exception as e:
                    logger.error(f"Failed to initialize Firebase with credentials: {e}")
                    self.FIREBASE_READY = False
            else:
                if self.ENVIRONMENT == "production":
                    raise ValueError(
                        "CRITICAL: Firebase credentials not found. "
                        "Set GOOGLE_APPLICATION_CREDENTIALS environment variable to path of service account JSON. "
                        "The migration cannot reach Firestore without it."
                    )
                logger.warning(
                    f"Firebase credentials not found at {self.FIREBASE_CREDENTIALS_PATH} (OK for development)"
                )
                self.FIREBASE_READY = False

        except ImportError:
            logger.error("firebase-admin not installed")
            self.FIREBASE_READY = False


settings = Settings()
