class StoreOperationError(Exception):
    """
    Raised when a statement could not be executed by the store
    (lost connection, constraint violation, malformed query).
    """

    def __init__(self, message: str, statement: str | None = None):
        super().__init__(message)
        self.message = message
        self.statement = statement


class StoreConstraintError(StoreOperationError):
    """The store rejected the statement because it violates a constraint."""
