from linkvault.utils.config import app_env, app_name, app_prefix, load_config, ServiceSettings
from linkvault.utils.helpers import base_url, get_short_url, is_valid_target_url, require_environment, guarantee_500_response
from linkvault.utils.shortener import ShortcodeGenerator, generate_shortcode
from linkvault.utils.retry import RetryPolicy, call_with_retry
from linkvault.utils.runtime import running_locally, invocation_deadline
from linkvault.utils.logging import initialize_logging


__all__ = [
    'ShortcodeGenerator',
    'generate_shortcode',
    'RetryPolicy',
    'call_with_retry',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'ServiceSettings',
    'base_url',
    'get_short_url',
    'is_valid_target_url',
    'require_environment',
    'guarantee_500_response',
    'running_locally',
    'invocation_deadline',
    'initialize_logging',
]
