"""Domain errors raised by the match store."""


class NotFoundError(LookupError):
    """Raised when a referenced user does not exist."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")
