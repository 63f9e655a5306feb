class FlatShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:flatshortener_error'


class ValidationError(FlatShortenerError):
    """Base exception for all client input errors."""

    error_code = 'validation:validation_error'


class InvalidURLError(ValidationError):
    """Raised when a target URL is missing or is not an absolute URL."""

    error_code = 'validation:invalid_url_error'


class InvalidAliasError(ValidationError):
    """Raised when a custom alias contains characters outside [0-9A-Za-z_-]."""

    error_code = 'validation:invalid_alias_error'


class ConfigurationError(FlatShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
