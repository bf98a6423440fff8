class SalesReportError(Exception):
    """Base class for failures raised while building a sales report."""


class InvalidInputData(SalesReportError, ValueError):
    """Dataset is missing, malformed, or has an empty collection."""


class MissingDependency(SalesReportError, TypeError):
    """Options do not provide both calculator callables."""


class LookupFailure(SalesReportError, LookupError):
    """A purchase record points at a seller or product that does not exist."""

    def __init__(self, kind: str, key: str, context: str = "") -> None:
        self.kind = kind
        self.key = key
        message = f"Unknown {kind} '{key}'"
        if context:
            message = f"{message} in {context}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]
