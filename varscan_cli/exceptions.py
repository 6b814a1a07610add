"""
Errors raised while building the workflow graph
"""


class VarscanCliError(Exception):
    """Base class for varscan-cli errors"""


class MissingConfigurationError(VarscanCliError):
    """A required configuration key has no value"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing required configuration key '{key}'")


class InvalidConfigurationValueError(VarscanCliError):
    """A configuration value could not be parsed to its expected type"""

    def __init__(self, key: str, value: str, expected: str):
        self.key = key
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid value '{value}' for configuration key '{key}': "
            f"expected {expected}"
        )


class MissingRequiredInputError(VarscanCliError):
    """A required input sample was not supplied"""

    def __init__(self, role: str, key: str):
        self.role = role
        self.key = key
        super().__init__(
            f"The '{role}' input is required; set the '{key}' configuration "
            "key"
        )


class GraphConstructionError(VarscanCliError):
    """A job could not be added to the workflow graph"""

    def __init__(self, job: str, reason: str):
        self.job = job
        self.reason = reason
        super().__init__(f"Cannot add job '{job}': {reason}")
