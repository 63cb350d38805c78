"""Application exceptions."""


class DatabaseNotConfigured(RuntimeError):
    """Raised when a query is attempted without DATABASE_URL."""

    def __init__(self, message='DATABASE_NOT_CONFIGURED'):
        super().__init__(message)


class AdminAuthNotConfigured(RuntimeError):
    """Raised when a session is issued without a usable signing secret."""

    def __init__(self, message='ADMIN_AUTH_NOT_CONFIGURED'):
        super().__init__(message)
