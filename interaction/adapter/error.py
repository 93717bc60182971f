"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class EventDeliveryError(AdapterError):
    """Event broker rejected or could not receive an event."""

    pass
