"""Registration-time configuration errors.

ConfigError is raised synchronously while a resource is being registered
(bad path type, missing model or router, invalid settings). It aborts the
registration: no route of the resource is added to the router.
"""


class ConfigError(Exception):
    """Invalid or incomplete configuration passed at registration time.

    Attributes:
        message: Human-readable description of the problem.
        field: Settings field that caused the error, if known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message
