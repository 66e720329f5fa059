"""Application-wide exceptions.

Every exception raised by linkvault derives from LinkVaultError and carries
a class-level `error_code` in the form '<layer>:<name>'.

Classes:
    ConfigurationError, MissingEnvironmentVariableError, BadConfigurationError:
        Raised while loading or validating configuration.

    NotFoundError:
        Resolve on an unknown shortcode. Recoverable by the caller.

    ConflictError:
        A generated shortcode is already bound. Internal to the mapping
        service, always retried with a fresh code and never surfaced.

    CapacityError:
        The create retry bound was exceeded.

    DependencyError:
        The durable store is unreachable or erroring after bounded retries.
"""


class LinkVaultError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkvault_error'


class ConfigurationError(LinkVaultError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ServiceError(LinkVaultError):
    """Base exception for mapping service errors."""

    error_code = 'service:service_error'


class NotFoundError(ServiceError):
    """Raised when a shortcode is not bound to any target URL."""

    error_code = 'service:not_found_error'


class ConflictError(ServiceError):
    """Raised when a generated shortcode is already bound (internal only)."""

    error_code = 'service:conflict_error'


class CapacityError(ServiceError):
    """Raised when no free shortcode was found within the create retry bound."""

    error_code = 'service:capacity_error'


class DependencyError(ServiceError):
    """Raised when the durable store keeps failing after bounded retries."""

    error_code = 'service:dependency_error'
