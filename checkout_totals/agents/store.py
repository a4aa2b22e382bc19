import httpx
import structlog

from checkout_totals.config import settings
from checkout_totals.errors import StoreAgentError

logger = structlog.get_logger()

class StoreAgent:
    """Reads cart and order snapshots from the commerce backend."""

    def __init__(self, base_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = (base_url or settings.STORE_API_URL).rstrip("/")
        self.transport = transport
        self.headers = {"x-publishable-api-key": settings.STORE_PUBLISHABLE_KEY}

    async def _get(self, path: str, key: str):
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=settings.HTTP_TIMEOUT,
            transport=self.transport,
        ) as client:
            response = await client.get(path)

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            logger.error("store_request_failed", path=path, status_code=response.status_code)
            raise StoreAgentError(f"Store request {path} failed", response.status_code, response.text)

        return response.json().get(key)

    async def get_cart(self, cart_id: str):
        return await self._get(f"/store/carts/{cart_id}", "cart")

    async def get_order(self, order_id: str):
        return await self._get(f"/admin/orders/{order_id}", "order")
