class XliffError(Exception):
    """Base class for errors raised by xliff12."""
    pass


class NoFilesError(XliffError):
    """The document has no <file> element to operate on."""

    def __init__(self, message: str = "document does not contain a file"):
        super().__init__(message)


class InvalidLastIDError(XliffError):
    """The last trans-unit id cannot be incremented because it is not a number."""

    def __init__(self, last_id: str):
        super().__init__(f"last TransUnit ID is not a number: {last_id!r}")
        self.last_id = last_id
