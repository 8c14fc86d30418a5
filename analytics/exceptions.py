class AnalyticsError(Exception):
    """Base for all analytics errors."""


class RoundsRequiredError(AnalyticsError, TypeError):
    """None was passed where a collection of rounds is required."""


def require_rounds(rounds, operation: str) -> None:
    if rounds is None:
        raise RoundsRequiredError(f"{operation} requires a collection of rounds, got None")
