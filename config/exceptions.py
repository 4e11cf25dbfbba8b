class ConfigError(Exception):
    """Base class for all configuration-related errors."""

    pass


class ConfigFileNotFoundError(ConfigError):
    def __init__(self, config_file: str, message: str = "Configuration file not found"):
        self.config_file = config_file
        self.message = f"{message}: {config_file}"
        super().__init__(self.message)


class ConfigParseError(ConfigError):
    def __init__(self, config_file: str, original_exception: Exception):
        self.config_file = config_file
        self.original_exception = original_exception
        self.message = f"Failed to parse configuration file {config_file}: {original_exception}"
        super().__init__(self.message)


class ConfigValidationError(ConfigError):
    def __init__(
        self,
        message: str = "Configuration validation failed",
        missing_fields: list[str] | None = None,
        invalid_fields: list[str] | None = None,
    ):
        self.missing_fields = missing_fields or []
        self.invalid_fields = invalid_fields or []
        details = []
        if self.missing_fields:
            details.append(f"Missing fields: {', '.join(self.missing_fields)}")
        if self.invalid_fields:
            details.append(f"Invalid fields: {', '.join(self.invalid_fields)}")
        self.message = f"{message}. {' | '.join(details)}" if details else message
        super().__init__(self.message)
