"""Errors raised while relaying a budget alert."""


class BudgetNotifierError(Exception):
    """Base class for failures that abort processing of one event."""


class DecodeError(BudgetNotifierError):
    """The payload is not a well-formed budget alert."""


class ClaimError(BudgetNotifierError):
    """The claim transaction failed or found a corrupt counter.

    No notification was sent, so redelivering the event is safe.
    """


class DeliveryError(BudgetNotifierError):
    """The webhook rejected the message or could not be reached.

    The claim is already committed when this is raised, so a redelivery of
    the same event is treated as a duplicate and the message is not resent.
    """
