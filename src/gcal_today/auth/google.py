"""Google OAuth credentials for the installed application flow.

## Required Setup

1. Create a project in Google Cloud Console
2. Enable Google Calendar API
3. Create OAuth 2.0 credentials (Desktop app) and download the JSON
4. Run ``gcal-today setup path/to/client_secret.json``

## Files

Both files live in the data directory (``GCAL_TODAY_DATA_DIR``):

- secret.json: OAuth client secret installed by ``setup``
- tokencache.json: User token written after the first sign-in, deleted by
  ``logout``

## Scopes Used

- https://www.googleapis.com/auth/calendar.readonly: Read calendar data
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from gcal_today.config import Settings, get_settings

logger = logging.getLogger(__name__)

CLIENT_SECRET_SECTIONS = ("installed", "web")


class CredentialsError(Exception):
    """Raised when OAuth credentials cannot be set up or loaded."""

    pass


class MissingClientSecretError(CredentialsError):
    """Raised when no client secret has been installed yet."""

    def __init__(self, data_dir: Path, prog: str = "gcal-today"):
        super().__init__(
            f"No secret.json found in '{data_dir}' directory. "
            f"Please run '{prog} setup'."
        )
        self.data_dir = data_dir


def ensure_data_dir(settings: Settings | None = None) -> Path:
    """Create the data directory if needed and return it."""
    settings = settings or get_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings.data_dir


def setup_client_secret(source: Path, settings: Settings | None = None) -> Path:
    """Install an OAuth client secret into the data directory.

    Args:
        source: Client secret JSON downloaded from Google Cloud Console
        settings: Settings to use (defaults to cached settings)

    Returns:
        Path of the installed secret

    Raises:
        CredentialsError: If the file is missing or not a client secret
    """
    settings = settings or get_settings()
    source = source.expanduser()

    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CredentialsError(f"Client secret file not found: {source}") from e
    except json.JSONDecodeError as e:
        raise CredentialsError(f"Client secret is not valid JSON: {source}") from e

    if not isinstance(data, dict) or not any(
        section in data for section in CLIENT_SECRET_SECTIONS
    ):
        raise CredentialsError(
            f"{source} is not an OAuth client secret "
            "(expected an 'installed' or 'web' section)"
        )

    ensure_data_dir(settings)
    shutil.copyfile(source, settings.secret_path)
    logger.info("Installed client secret to %s", settings.secret_path)
    return settings.secret_path


def _load_cached_token(settings: Settings) -> Credentials | None:
    path = settings.token_cache_path
    if not path.exists():
        return None
    try:
        return Credentials.from_authorized_user_file(str(path), settings.calendar_scopes)
    except ValueError as e:
        logger.warning("Ignoring unreadable token cache %s: %s", path, e)
        return None


def _save_token(creds: Credentials, settings: Settings) -> None:
    ensure_data_dir(settings)
    settings.token_cache_path.write_text(creds.to_json(), encoding="utf-8")
    logger.debug("Saved token to %s", settings.token_cache_path)


def load_credentials(settings: Settings | None = None) -> Credentials:
    """Get user credentials, signing in through the browser if needed.

    Cached tokens are reused and refreshed when expired. Without a usable
    token the installed-app flow opens a browser for consent.

    Raises:
        MissingClientSecretError: If ``setup`` has not been run
    """
    settings = settings or get_settings()

    if not settings.secret_path.exists():
        raise MissingClientSecretError(settings.data_dir)

    creds = _load_cached_token(settings)
    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        logger.info("Refreshing expired OAuth token...")
        try:
            creds.refresh(Request())
            _save_token(creds, settings)
            return creds
        except RefreshError as e:
            logger.warning("Token refresh failed, signing in again: %s", e)

    logger.info("Starting OAuth flow...")
    flow = InstalledAppFlow.from_client_secrets_file(
        str(settings.secret_path), settings.calendar_scopes
    )
    creds = flow.run_local_server(port=0)
    _save_token(creds, settings)
    return creds


def logout(settings: Settings | None = None) -> bool:
    """Delete the cached token.

    Returns:
        True if a token was removed, False if there was none
    """
    settings = settings or get_settings()
    try:
        settings.token_cache_path.unlink()
    except FileNotFoundError:
        return False
    logger.info("Deleted token cache %s", settings.token_cache_path)
    return True
