"""
Webhook notifier.

POSTs JSON events about orders and invoices to a configured URL. When
no URL is configured every call is a no-op.
"""

import httpx

from repairshop.config import get_logger
from repairshop.core.entities.budget import Invoice, format_brl
from repairshop.core.entities.service_order import ServiceOrder
from repairshop.core.exceptions import ConfigurationError, NotificationError
from repairshop.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


class WebhookNotifier(INotifier):
    """Client notifications delivered through an HTTP webhook."""

    channel = "webhook"

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if webhook_url and not webhook_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Webhook URL must be http(s): {webhook_url}",
                code="INVALID_WEBHOOK_URL",
                details={"webhook_url": webhook_url},
            )
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.webhook_url)

    async def _post(self, event: str, payload: dict) -> None:
        if not self.is_configured:
            logger.debug("webhook_not_configured", event_type=event)
            return

        body = {"event": event, **payload}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.webhook_url, json=body)
        except httpx.HTTPError as e:
            raise NotificationError(self.channel, str(e)) from e

        if response.status_code >= 400:
            raise NotificationError(
                self.channel, f"HTTP {response.status_code}: {response.text[:200]}"
            )
        logger.info("webhook_sent", event_type=event, status_code=response.status_code)

    async def order_created(self, order: ServiceOrder) -> None:
        await self._post(
            "order_created",
            {
                "os_number": order.os_number,
                "client_id": order.client_id,
                "client_name": order.client_name,
                "device": order.device,
                "defect": order.defect,
                "entry_date": order.entry_date.isoformat(),
            },
        )

    async def invoice_issued(self, invoice: Invoice) -> None:
        await self._post(
            "invoice_issued",
            {
                "invoice_id": invoice.id,
                "os_number": invoice.os_number,
                "client_name": invoice.client_name,
                "device": invoice.device,
                "total_value": invoice.total_value,
                "total_display": format_brl(invoice.total_value),
                "issue_date": invoice.issue_date.isoformat(),
                "warranty_end_date": invoice.warranty_end_date.isoformat(),
                "technician_name": invoice.technician_name,
            },
        )
