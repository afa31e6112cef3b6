"""
Google OAuth Scopes for Photo Drive.

The backend only needs to identify the user and manage the files it creates.
"""

from typing import List

# Base OAuth scopes required for user identification
USERINFO_PROFILE_SCOPE = "https://www.googleapis.com/auth/userinfo.profile"
USERINFO_EMAIL_SCOPE = "https://www.googleapis.com/auth/userinfo.email"

BASE_SCOPES = [USERINFO_PROFILE_SCOPE, USERINFO_EMAIL_SCOPE]

# Google Drive scope limited to files created or opened by this app
DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"

SCOPES = BASE_SCOPES + [DRIVE_FILE_SCOPE]


def get_scopes() -> List[str]:
    """
    Get the list of OAuth scopes required for Photo Drive.

    Returns:
        List of unique OAuth scopes, in a stable order.
    """
    return list(dict.fromkeys(SCOPES))
