class CheckoutTotalsError(Exception):
    """Base error for the orchestration layer. The pricing engine never raises it."""


class CartNotFoundError(CheckoutTotalsError):
    pass


class OrderNotFoundError(CheckoutTotalsError):
    pass


class PaymentCollectionNotFoundError(CheckoutTotalsError):
    pass


class AgentError(CheckoutTotalsError):
    """An external collaborator answered with an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class StoreAgentError(AgentError):
    pass


class PaymentAgentError(AgentError):
    pass
