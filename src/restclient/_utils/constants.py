# Environment variables
ENV_BASE_URL = "RESTCLIENT_BASE_URL"
ENV_TIMEOUT = "RESTCLIENT_TIMEOUT"
ENV_USER_AGENT = "RESTCLIENT_USER_AGENT"
ENV_FOLLOW_REDIRECTS = "RESTCLIENT_FOLLOW_REDIRECTS"
ENV_DEBUG = "RESTCLIENT_DEBUG"

# Headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

# Defaults
DEFAULT_TIMEOUT = 100.0
DEFAULT_USER_AGENT = "restclient-python"

LOGGER_NAME = "restclient"
