"""Centralized constants for the Photo Drive backend."""

# MIME Types
FOLDER_MIME_TYPE = 'application/vnd.google-apps.folder'
DEFAULT_FILE_MIME_TYPE = 'application/octet-stream'

# Drive response fields
FOLDER_LIST_FIELDS = 'files(id, name)'
UPLOADED_FILE_FIELDS = 'id, name, webViewLink, thumbnailLink'

# Upload form
UPLOAD_FIELD_NAME = 'imageFiles'
MAX_UPLOAD_FILES = 50

# Default Values
DEFAULT_PORT = 3001
DEFAULT_UPLOAD_CONCURRENCY = 5
OAUTH_STATE_TTL_SECONDS = 600

# Session transport
SESSION_COOKIE_NAME = 'photo_drive_session'
SESSION_HEADER_NAME = 'X-Session-Token'

# Session limits
MAX_PENDING_OAUTH_STATES = 1000
MAX_SESSIONS_PER_USER = 20
