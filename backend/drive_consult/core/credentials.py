"""Google service-account credentials shared by Drive and Vertex AI."""

from pathlib import Path
import json

from google.oauth2 import service_account

from drive_consult.core.config import Settings

SCOPES = [
    "https://www.googleapis.com/auth/drive.readonly",
    "https://www.googleapis.com/auth/cloud-platform",
]


def load_google_credentials(settings: Settings) -> service_account.Credentials:
    """Load credentials from GOOGLE_CREDENTIALS_JSON, else from the credentials file.

    The environment variable wins so that hosted deployments never need a
    file on disk.
    """
    if settings.google_credentials_json:
        info = json.loads(settings.google_credentials_json)
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)

    cred_file = Path(settings.google_credentials_file)
    if not cred_file.exists():
        raise FileNotFoundError(
            f"{cred_file} not found. Set GOOGLE_CREDENTIALS_JSON or GOOGLE_CREDENTIALS_FILE."
        )
    return service_account.Credentials.from_service_account_file(str(cred_file), scopes=SCOPES)
