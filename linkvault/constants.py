import string
from enum import StrEnum


class Defaults:
    """Default service parameters."""

    SHORTCODE_LENGTH = 7  # 62^7 ~ 3.5 * 10^12 codes
    SHORTCODE_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    MAX_CREATE_ATTEMPTS = 5  # Fresh codes tried before giving up with CapacityError
    MAX_TARGET_URL_LENGTH = 2048

    # Durable store retry policy (retries after the first attempt, seconds)
    RETRY_TOTAL = 3
    RETRY_BASE = 0.05
    RETRY_CAP = 0.5

    # Network timeouts (seconds)
    STORE_CONNECT_TIMEOUT = 1.0
    STORE_READ_TIMEOUT = 2.0
    CACHE_SOCKET_TIMEOUT = 0.25

    # Time kept in reserve before the Lambda invocation deadline (seconds)
    DEADLINE_SAFETY_MARGIN = 0.5


class Backend(StrEnum):
    """Durable store backends selectable via 'active_backend'."""

    DYNAMODB = 'dynamodb'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
DEPENDENCY_UNAVAILABLE = 'DEPENDENCY_UNAVAILABLE'
