"""Authentication module.

Provides OAuth credentials for the Google Calendar API.

## OAuth Flow

1. User installs the client secret with ``gcal-today setup``
2. First command opens the Google consent screen in a browser
3. Google redirects to a local server with the authorization code
4. Code is exchanged for access and refresh tokens
5. Tokens are cached in the data directory and refreshed when expired
"""

from gcal_today.auth.google import (
    CredentialsError,
    MissingClientSecretError,
    ensure_data_dir,
    load_credentials,
    logout,
    setup_client_secret,
)

__all__ = [
    "CredentialsError",
    "MissingClientSecretError",
    "ensure_data_dir",
    "load_credentials",
    "logout",
    "setup_client_secret",
]
