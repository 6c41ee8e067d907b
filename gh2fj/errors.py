class Gh2fjError(Exception):
    """Base class for all gh2fj errors"""


class ConfigurationError(Gh2fjError):
    """A required setting is missing"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class AuthError(Gh2fjError):
    """The GitHub credential was rejected"""


class NotFound(Gh2fjError):
    """The requested entity does not exist on the queried service"""


class TransientError(Gh2fjError):
    """Any other HTTP or network failure"""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)
