import base64
import binascii
import json
from pathlib import Path

from app.config.settings import Settings
from app.logging.logger import Log

CREDENTIALS_FILENAME = "service-account.json"


class CredentialsError(Exception):
    """Raised when the configured service account key cannot be materialized."""


def materialize_credentials(settings: Settings) -> Path | None:
    """Resolve the service account key file used by the OCR client.

    A base64 key blob takes precedence and is written to
    {credentials_dir}/service-account.json. Otherwise a pre-existing key file
    is used. None means Application Default Credentials.

    Raises:
        CredentialsError: if the blob is not valid base64-encoded JSON, or the
            configured key file does not exist.
    """
    if settings.google_credentials_base64:
        return _write_key_blob(settings.google_credentials_base64, settings.credentials_dir)

    if settings.google_application_credentials:
        path = Path(settings.google_application_credentials)
        if not path.exists():
            raise CredentialsError(f"Credentials file not found: {path}")
        Log.info(f"Using service account key file {path}")
        return path

    Log.info("No service account key configured, using default credentials")
    return None


def _write_key_blob(blob: str, credentials_dir: Path) -> Path:
    try:
        raw = base64.b64decode(blob, validate=True)
        json.loads(raw)
    except (binascii.Error, ValueError) as exc:
        raise CredentialsError(f"Invalid base64 service account key: {exc}") from exc

    credentials_dir.mkdir(parents=True, exist_ok=True)
    path = credentials_dir / CREDENTIALS_FILENAME
    path.write_bytes(raw)
    path.chmod(0o600)
    Log.info(f"Service account key written to {path}")
    return path
