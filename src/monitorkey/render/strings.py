"""Fixed messages used when presenting a generated key."""

AUTHORIZATION_HEADER = "Authorization"
"""Standard HTTP header carrying the token."""

API_KEY_SCHEME = "Bearer"
"""Authentication scheme the monitor expects for API keys."""

MESSAGE_GENERATE_API_KEY = (
    "Generated ApiKey for dotnet-monitor; use the following header for authorization:"
)
MESSAGE_AUTHORIZATION_HEADER = "{0}: {1} {2}"
MESSAGE_SETTINGS_DUMP = "Settings in {0} format:"
MESSAGE_SUBJECT = "Subject: {0}"
MESSAGE_PUBLIC_KEY = "Public Key: {0}"
