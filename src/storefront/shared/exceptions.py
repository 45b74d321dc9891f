"""Error taxonomy shared by every storefront context.

Each error carries a ``messages`` dict keyed by the offending field, the same
shape the ordering and catalogue contexts have always reported validation
problems in: ``{"quantity": ["Quantity must be positive"]}``.
"""


class StorefrontError(Exception):
    """Base class for all domain failures."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)

    def __str__(self):
        return "; ".join(f"{field}: {', '.join(errors)}" for field, errors in self.messages.items())


class InvalidArgumentError(StorefrontError):
    """Caller-supplied input violates a precondition."""


class NotFoundError(StorefrontError):
    """The referenced product, order or cart line does not exist."""


class InvalidStateError(StorefrontError):
    """The operation is not allowed in the entity's current state."""
