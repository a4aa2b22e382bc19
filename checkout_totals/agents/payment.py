import httpx
import structlog

from checkout_totals.config import settings
from checkout_totals.errors import PaymentAgentError

logger = structlog.get_logger()

class PaymentAgent:
    """Reads and corrects the amount held by a payment collection."""

    def __init__(self, base_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = (base_url or settings.PAYMENT_API_URL).rstrip("/")
        self.transport = transport
        self.headers = {"Authorization": f"Bearer {settings.PAYMENT_API_KEY}"}

    def _client(self):
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=settings.HTTP_TIMEOUT,
            transport=self.transport,
        )

    async def get_payment_collection(self, payment_collection_id: str):
        async with self._client() as client:
            response = await client.get(f"/payment-collections/{payment_collection_id}")

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            raise PaymentAgentError(
                f"Could not read payment collection {payment_collection_id}",
                response.status_code,
                response.text,
            )

        return response.json().get("payment_collection")

    async def update_amount(self, payment_collection_id: str, amount: int, metadata: dict):
        async with self._client() as client:
            response = await client.post(
                f"/payment-collections/{payment_collection_id}/amount",
                json={"amount": amount, "metadata": metadata},
            )

        if response.status_code != 200:
            logger.error(
                "payment_amount_update_failed",
                payment_collection_id=payment_collection_id,
                status_code=response.status_code,
            )
            raise PaymentAgentError(
                f"Could not update payment collection {payment_collection_id}",
                response.status_code,
                response.text,
            )

        return response.json().get("payment_collection")
