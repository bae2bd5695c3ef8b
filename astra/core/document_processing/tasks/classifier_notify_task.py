"""
Classifier notification task.

Tells the downstream classifier workflow (n8n webhook) that a document is
ready. Best effort: failures are logged and reported, never raised.

Dependencies: httpx
System role: Final, optional stage of document ingestion pipeline
"""

import logging

import httpx

from ..models import NotificationResult, NotificationStatus

logger = logging.getLogger(__name__)


class ClassifierNotifyTask:
    """POST {team_id, document_id, file_name, trigger_source} to the webhook."""

    def __init__(
        self,
        webhook_url: str | None,
        trigger_source: str = "local_upload_pdf",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize notification task.

        Args:
            webhook_url: Classifier webhook; notification is skipped when None
            trigger_source: Value sent as trigger_source
            timeout: Request timeout in seconds
            http_client: Shared client (owned by the caller)
        """
        self._webhook_url = webhook_url
        self._trigger_source = trigger_source
        self._timeout = timeout
        self._http_client = http_client

    async def notify(self, team_id: str, document_id: str, file_name: str) -> NotificationResult:
        """
        Notify the classifier.

        Args:
            team_id: Owning team
            document_id: Ingested document
            file_name: Sanitized filename

        Returns:
            NotificationResult: sent, skipped (no webhook) or failed
        """
        if not self._webhook_url:
            return NotificationResult(status=NotificationStatus.SKIPPED)

        payload = {
            "team_id": team_id,
            "document_id": document_id,
            "file_name": file_name,
            "trigger_source": self._trigger_source,
        }

        try:
            if self._http_client is not None:
                response = await self._http_client.post(self._webhook_url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._webhook_url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(
                f"{__name__}:notify - Classifier webhook error (non-fatal): {type(e).__name__}: {e}",
                extra={"document_id": document_id},
            )
            return NotificationResult(status=NotificationStatus.FAILED, error=str(e))

        if response.is_error:
            logger.warning(
                f"{__name__}:notify - Classifier webhook returned HTTP {response.status_code} (non-fatal)",
                extra={"document_id": document_id},
            )
            return NotificationResult(
                status=NotificationStatus.FAILED,
                error=f"HTTP {response.status_code}",
            )

        logger.info(
            f"{__name__}:notify - Background classifier triggered",
            extra={"document_id": document_id},
        )
        return NotificationResult(status=NotificationStatus.SENT)
