"""
Tests for POST /api/v1/documents/process.

Pipeline, auth client and database session are replaced through FastAPI
dependency overrides; the team lookup is patched on the CRUD singleton.

System role: Verification of the ingestion HTTP contract
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from astra.api.deps import get_auth_client, get_document_pipeline
from astra.api.main import create_app
from astra.boundary.db import get_async_db, user_crud
from astra.core.document_processing.models import (
    NotificationResult,
    NotificationStatus,
    PipelineResult,
)
from astra.core.exceptions import (
    AuthError,
    EmbeddingProviderError,
    EmptyContentError,
    StorageUnavailableError,
)


@pytest.fixture
def pipeline() -> MagicMock:
    pipeline = MagicMock()
    pipeline.process = AsyncMock()
    return pipeline


@pytest.fixture
def auth_client(user_id: uuid.UUID) -> MagicMock:
    client = MagicMock()
    client.get_user_id = AsyncMock(return_value=user_id)
    return client


@pytest.fixture
def client(pipeline: MagicMock, auth_client: MagicMock, team_id: uuid.UUID):
    app = create_app()

    async def override_db():
        yield AsyncMock()

    app.dependency_overrides[get_document_pipeline] = lambda: pipeline
    app.dependency_overrides[get_auth_client] = lambda: auth_client
    app.dependency_overrides[get_async_db] = override_db

    with patch.object(user_crud, "get_team_id", AsyncMock(return_value=team_id)):
        yield TestClient(app)


@pytest.fixture
def body(team_id: uuid.UUID, user_id: uuid.UUID) -> dict:
    return {
        "uploadId": "upload-1",
        "storagePath": f"{team_id}/1718000000000_minutes.pdf",
        "filename": "minutes.pdf",
        "mimeType": "application/pdf",
        "teamId": str(team_id),
        "userId": str(user_id),
    }


AUTH = {"Authorization": "Bearer token-abc"}


class TestProcessDocumentSuccess:
    def test_returns_camel_case_summary(self, client, pipeline, body) -> None:
        pipeline.process.return_value = PipelineResult(
            document_id="doc-1",
            chunk_count=3,
            character_count=3200,
            notification=NotificationResult(status=NotificationStatus.SENT),
            processing_time_ms=12.5,
        )

        response = client.post("/api/v1/documents/process", json=body, headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "documentId": "doc-1",
            "chunkCount": 3,
            "characterCount": 3200,
        }

    def test_passes_parsed_request_and_token(self, client, pipeline, auth_client, body) -> None:
        pipeline.process.return_value = PipelineResult(
            document_id="doc-1",
            chunk_count=1,
            character_count=10,
            notification=NotificationResult(status=NotificationStatus.SKIPPED),
            processing_time_ms=1.0,
        )

        client.post("/api/v1/documents/process", json=body, headers=AUTH)

        auth_client.get_user_id.assert_awaited_once_with("token-abc")
        request = pipeline.process.await_args.args[0]
        assert request.storage_path == body["storagePath"]
        assert request.mime_type == "application/pdf"


class TestProcessDocumentGate:
    def test_missing_authorization_is_401(self, client, pipeline, body) -> None:
        response = client.post("/api/v1/documents/process", json=body)

        assert response.status_code == 401
        assert response.json() == {"error": "Missing authorization header"}
        pipeline.process.assert_not_called()

    def test_rejected_token_is_401(self, client, auth_client, pipeline, body) -> None:
        auth_client.get_user_id.side_effect = AuthError("Unauthorized")

        response = client.post("/api/v1/documents/process", json=body, headers=AUTH)

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        pipeline.process.assert_not_called()

    def test_team_mismatch_is_403(self, client, pipeline, body) -> None:
        body["teamId"] = str(uuid.uuid4())

        response = client.post("/api/v1/documents/process", json=body, headers=AUTH)

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized - team mismatch"
        pipeline.process.assert_not_called()

    def test_missing_field_is_400(self, client, pipeline, body) -> None:
        del body["storagePath"]

        response = client.post("/api/v1/documents/process", json=body, headers=AUTH)

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "Missing or invalid request fields"
        assert payload["details"]["errors"][0]["field"] == "storagePath"
        pipeline.process.assert_not_called()


class TestProcessDocumentFailures:
    @pytest.mark.parametrize(
        "error,status",
        [
            (EmptyContentError("No text content could be extracted from the file"), 400),
            (EmbeddingProviderError("Embedding provider error: HTTP 500", provider_status=500), 502),
            (
                StorageUnavailableError(
                    "File not found in storage. Please re-upload.", status_code=404
                ),
                404,
            ),
        ],
    )
    def test_pipeline_errors_map_to_status(self, client, pipeline, body, error, status) -> None:
        pipeline.process.side_effect = error

        response = client.post("/api/v1/documents/process", json=body, headers=AUTH)

        assert response.status_code == status
        assert response.json()["error"] == error.message

    def test_error_details_are_returned(self, client, pipeline, body) -> None:
        pipeline.process.side_effect = EmbeddingProviderError(
            "Embedding provider still rate limiting after 3 retries",
            provider_status=429,
            payload='{"error": "rate_limit_exceeded"}',
        )

        response = client.post("/api/v1/documents/process", json=body, headers=AUTH)

        details = response.json()["details"]
        assert details["provider_status"] == 429
        assert "rate_limit_exceeded" in details["provider_payload"]
