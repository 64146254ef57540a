"""
tests/test_api_routes.py

End-to-end HTTP tests through FastAPI's TestClient on SQLite.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.config import get_upload_settings
from app.main import create_app
from app.services.task_queue import SchedulerTaskQueue


class RecordingExecutor:
    def __init__(self) -> None:
        self.submitted: list[tuple[Callable[..., None], tuple[Any, ...]]] = []

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        self.submitted.append((task, args))

    def run_all(self) -> None:
        pending, self.submitted = self.submitted, []
        for task, args in pending:
            task(*args)


PRODUCT_MAPPINGS = [
    {"csv_column_name": "Brand Name", "db_field_name": "brand", "data_type": "string"},
    {"csv_column_name": "Description", "db_field_name": "description", "data_type": "text"},
    {"csv_column_name": "Unit Price", "db_field_name": "price", "data_type": "decimal"},
]


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def client(session_factory, executor: RecordingExecutor, tmp_path: Path, monkeypatch) -> Iterator[TestClient]:
    monkeypatch.setenv("UPLOAD_STORAGE_DIR", str(tmp_path / "uploads"))
    get_upload_settings.cache_clear()
    app = create_app(session_factory=session_factory, executor=executor)
    with TestClient(app) as test_client:
        yield test_client
    get_upload_settings.cache_clear()


def _upload(client: TestClient, path: Path) -> str:
    response = client.post(
        "/api/files/upload",
        files={"file": (path.name, path.read_bytes(), "text/csv")},
    )
    assert response.status_code == 201, response.text
    return response.json()["file"]["id"]


def _create_mappings(client: TestClient) -> list[str]:
    response = client.post("/api/mappings/bulk", json={"mappings": PRODUCT_MAPPINGS})
    assert response.status_code == 201, response.text
    return [mapping["id"] for mapping in response.json()]


def _process(client: TestClient, file_id: str, mapping_ids: list[str], *, use_queue: bool) -> Any:
    return client.post(
        "/api/files/process",
        json={"fileId": file_id, "mappingIds": mapping_ids, "useQueue": use_queue},
    )


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_upload_and_list_files(client: TestClient, products_csv: Path) -> None:
    file_id = _upload(client, products_csv)

    listing = client.get("/api/files").json()
    assert [item["id"] for item in listing] == [file_id]
    assert listing[0]["status"] == "uploaded"
    assert listing[0]["file_name"] == "products.csv"

    single = client.get(f"/api/files/{file_id}")
    assert single.status_code == 200
    assert single.json()["id"] == file_id


def test_upload_rejects_non_csv(client: TestClient) -> None:
    response = client.post(
        "/api/files/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only CSV files are allowed."


def test_upload_rejects_oversized_file(client: TestClient, monkeypatch, products_csv: Path) -> None:
    monkeypatch.setenv("UPLOAD_MAX_BYTES", "16")
    get_upload_settings.cache_clear()

    response = client.post(
        "/api/files/upload",
        files={"file": ("big.csv", products_csv.read_bytes(), "text/csv")},
    )

    assert response.status_code == 400
    assert client.get("/api/files").json() == []


def test_preview(client: TestClient, products_csv: Path) -> None:
    file_id = _upload(client, products_csv)

    response = client.get(f"/api/files/preview/{file_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["fileId"] == file_id
    assert body["fileName"] == "products.csv"
    assert body["headers"] == ["Brand Name", "Description", "Unit Price"]
    assert len(body["previewData"]) == 3
    assert body["previewData"][0]["Brand Name"] == "Acme"


def test_unknown_file_is_404(client: TestClient) -> None:
    missing = "00000000-0000-0000-0000-000000000000"

    assert client.get(f"/api/files/{missing}").status_code == 404
    assert client.get(f"/api/files/preview/{missing}").status_code == 404
    assert client.get(f"/api/mappings/suggestions/{missing}").status_code == 404
    assert _process(client, missing, [missing], use_queue=False).status_code == 404


def test_fields_and_suggestions(client: TestClient, products_csv: Path) -> None:
    fields = client.get("/api/mappings/fields/available").json()
    assert len(fields) == 9
    assert fields[0] == {"name": "brand", "type": "string"}

    file_id = _upload(client, products_csv)
    body = client.get(f"/api/mappings/suggestions/{file_id}").json()

    assert body["fileId"] == file_id
    suggestions = {item["csv_column_name"]: item for item in body["suggestions"]}
    assert suggestions["Brand Name"]["db_field_name"] == "brand"
    assert suggestions["Description"]["db_field_name"] == "description"


def test_invalid_mapping_is_rejected_and_nothing_is_created(client: TestClient) -> None:
    response = client.post(
        "/api/mappings/bulk",
        json={
            "mappings": [
                {"csv_column_name": "Brand", "db_field_name": "brand", "data_type": "string"},
                {"csv_column_name": "X", "db_field_name": "not_a_field", "data_type": "string"},
            ]
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Invalid database field: not_a_field"
    assert client.get("/api/mappings").json() == []


def test_create_and_get_single_mapping(client: TestClient) -> None:
    response = client.post("/api/mappings", json=PRODUCT_MAPPINGS[0])
    assert response.status_code == 201
    mapping_id = response.json()["id"]

    fetched = client.get(f"/api/mappings/{mapping_id}")
    assert fetched.status_code == 200
    assert fetched.json()["db_field_name"] == "brand"
    assert client.get("/api/mappings/00000000-0000-0000-0000-000000000000").status_code == 404


def test_inline_processing_and_record_listing(client: TestClient, products_csv: Path) -> None:
    file_id = _upload(client, products_csv)
    mapping_ids = _create_mappings(client)

    response = _process(client, file_id, mapping_ids, use_queue=False)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["results"] == {"total": 3, "processed": 3, "failed": 0, "errors": []}
    assert body["file"]["status"] == "completed"

    page = client.get(f"/api/data/file/{file_id}", params={"limit": 2}).json()
    assert page["totalItems"] == 3
    assert page["totalPages"] == 2
    assert page["currentPage"] == 1
    assert [record["brand"] for record in page["records"]] == ["Acme", "Globex"]

    all_records = client.get("/api/data").json()
    assert all_records["totalItems"] == 3
    record_id = all_records["records"][0]["id"]
    assert client.get(f"/api/data/{record_id}").json()["price"] == 12.5
    assert client.get("/api/data/999999").status_code == 404


def test_inline_processing_with_unknown_mappings_is_404(client: TestClient, products_csv: Path) -> None:
    file_id = _upload(client, products_csv)

    response = _process(client, file_id, ["00000000-0000-0000-0000-000000000000"], use_queue=False)

    assert response.status_code == 404


def test_queued_processing_reports_job_status(
    client: TestClient,
    executor: RecordingExecutor,
    products_csv: Path,
) -> None:
    file_id = _upload(client, products_csv)
    mapping_ids = _create_mappings(client)

    response = _process(client, file_id, mapping_ids, use_queue=True)

    assert response.status_code == 202, response.text
    job_id = response.json()["jobId"]
    queued = client.get(f"/api/files/job/{job_id}").json()
    assert queued["status"] == "queued"
    assert queued["mapping_ids"] == mapping_ids

    executor.run_all()

    finished = client.get(f"/api/files/job/{job_id}").json()
    assert finished["status"] == "completed"
    assert finished["result"]["processed"] == 3
    assert client.get(f"/api/files/{file_id}").json()["status"] == "completed"

    jobs = client.get("/api/files/jobs", params={"status": "completed"}).json()["jobs"]
    assert [job["job_id"] for job in jobs] == [job_id]
    assert client.get("/api/files/job/00000000-0000-0000-0000-000000000000").status_code == 404


def test_process_requires_mapping_ids(client: TestClient, products_csv: Path) -> None:
    file_id = _upload(client, products_csv)

    response = _process(client, file_id, [], use_queue=False)

    assert response.status_code == 422


def test_stopped_queue_returns_503_and_fails_the_job(
    session_factory,
    tmp_path: Path,
    monkeypatch,
    products_csv: Path,
) -> None:
    monkeypatch.setenv("UPLOAD_STORAGE_DIR", str(tmp_path / "uploads"))
    get_upload_settings.cache_clear()
    app = create_app(session_factory=session_factory, executor=SchedulerTaskQueue(worker_count=1))

    with TestClient(app) as stopped_client:
        file_id = _upload(stopped_client, products_csv)
        mapping_ids = _create_mappings(stopped_client)

        response = _process(stopped_client, file_id, mapping_ids, use_queue=True)

        assert response.status_code == 503
        assert "not scheduled" in response.json()["detail"]
        [job] = stopped_client.get("/api/files/jobs").json()["jobs"]
        assert job["status"] == "failed"
        assert job["error"] == "Failed to schedule CSV processing job."
    get_upload_settings.cache_clear()
