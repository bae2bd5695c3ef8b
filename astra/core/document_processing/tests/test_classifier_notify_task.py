"""Tests for the best-effort classifier webhook notification."""

import json

import httpx

from astra.core.document_processing.models import NotificationStatus
from astra.core.document_processing.tasks.classifier_notify_task import ClassifierNotifyTask

WEBHOOK = "https://n8n.test/webhook/background-classifier"


def _task(handler) -> ClassifierNotifyTask:
    return ClassifierNotifyTask(
        webhook_url=WEBHOOK,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


async def test_posts_document_summary() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"ok": True})

    result = await _task(handler).notify("team-1", "doc-1", "minutes.pdf")

    assert result.status == NotificationStatus.SENT
    assert bodies == [
        {
            "team_id": "team-1",
            "document_id": "doc-1",
            "file_name": "minutes.pdf",
            "trigger_source": "local_upload_pdf",
        }
    ]


async def test_no_webhook_configured_is_skipped() -> None:
    result = await ClassifierNotifyTask(webhook_url=None).notify("team-1", "doc-1", "a.pdf")

    assert result.status == NotificationStatus.SKIPPED


async def test_error_status_is_reported_not_raised() -> None:
    result = await _task(lambda request: httpx.Response(503)).notify("t", "d", "f")

    assert result.status == NotificationStatus.FAILED
    assert result.error == "HTTP 503"


async def test_transport_error_is_reported_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    result = await _task(handler).notify("t", "d", "f")

    assert result.status == NotificationStatus.FAILED
    assert "no route to host" in result.error
