"""
API endpoint tests for all routes.
Uses a temporary SQLite database + dependency-overridden FastAPI test client.
"""
from conftest import FailingGateway, table_counts, vendor_form
from vendor_onboarding.main import app
from vendor_onboarding.routers.dependencies import get_upload_service, get_vendor_service
from vendor_onboarding.services.upload import DocumentUploadService
from vendor_onboarding.services.vendor import VendorService

ENVELOPE_KEYS = {"status", "info", "data", "startDT", "endDT", "tat"}
PDF = b"%PDF-1.4 pan card scan"


def _assert_envelope(body, status):
    assert set(body) == ENVELOPE_KEYS
    assert body["status"] == status
    assert body["tat"] >= 0


# ===================== HEALTH =====================


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


# ===================== CREATE VENDOR =====================


async def test_create_vendor(client, engine):
    r = await client.post("/api/v1/vendor", json={"data": vendor_form()})

    assert r.status_code == 200
    body = r.json()
    _assert_envelope(body, "success")
    assert body["info"] == "Vendor created successfully"
    assert set(body["data"]) == {"vendorId"}
    assert (await table_counts(engine))["vendor_master"] == 1


async def test_create_vendor_without_payload(client):
    r = await client.post("/api/v1/vendor", json={})

    assert r.status_code == 400
    body = r.json()
    _assert_envelope(body, "error")
    assert body["info"] == "No data provided"
    assert body["data"] is None


async def test_create_vendor_missing_name(client, engine):
    r = await client.post("/api/v1/vendor", json={"data": {"tradeName": "Nameless"}})

    assert r.status_code == 400
    assert r.json()["info"] == "Required fields missing: name"
    assert (await table_counts(engine))["vendor_master"] == 0


async def test_create_vendor_invalid_document_type(client, engine):
    form = vendor_form(
        documents=[{"documentType": "passport", "fileUrl": "https://x/p.pdf", "fileKey": "p.pdf"}]
    )
    r = await client.post("/api/v1/vendor", json={"data": form})

    assert r.status_code == 400
    assert "documents" in r.json()["info"]
    assert (await table_counts(engine))["vendor_master"] == 0


async def test_create_vendor_over_long_value(client, engine):
    r = await client.post("/api/v1/vendor", json={"data": vendor_form(panNumber="P" * 21)})

    assert r.status_code == 400
    _assert_envelope(r.json(), "error")
    assert (await table_counts(engine))["vendor_master"] == 0


async def test_create_vendor_transaction_failure(client, engine):
    app.dependency_overrides[get_vendor_service] = lambda: VendorService(
        engine, gateway_factory=lambda: FailingGateway(engine, fail_on_call=4)
    )

    r = await client.post("/api/v1/vendor", json={"data": vendor_form()})

    assert r.status_code == 500
    body = r.json()
    _assert_envelope(body, "error")
    assert "rolled back" in body["info"]
    assert "Traceback" not in body["info"]
    assert (await table_counts(engine))["vendor_master"] == 0


# ===================== READ VENDORS =====================


async def test_get_vendor(client):
    created = await client.post(
        "/api/v1/vendor",
        json={"data": vendor_form(verifications={"pan": {"verified": True, "verifiedAt": "2024-01-05T10:00:00"}})},
    )
    vendor_id = created.json()["data"]["vendorId"]

    r = await client.get(f"/api/v1/vendor/{vendor_id}")

    assert r.status_code == 200
    body = r.json()
    _assert_envelope(body, "success")
    vendor = body["data"]
    assert vendor["id"] == vendor_id
    assert vendor["name"] == "Shree Ganesh Traders"
    assert vendor["banking"]["ifscCode"] == "HDFC0000060"
    assert vendor["identification"]["panNumber"] == "AAAFS1234K"
    assert vendor["verifications"]["pan"] == {"verified": True, "verifiedAt": "2024-01-05T10:00:00Z"}
    assert vendor["verifications"]["bankDetails"] == {"verified": False, "verifiedAt": None}
    assert vendor["customFields"][0]["fieldName"] == "msmeNumber"
    assert vendor["documents"][0]["documentType"] == "cancelled_cheque"


async def test_get_vendor_not_found(client):
    r = await client.get("/api/v1/vendor/00000000-0000-0000-0000-000000000000")

    assert r.status_code == 404
    body = r.json()
    _assert_envelope(body, "error")
    assert "not found" in body["info"]


async def test_list_vendors(client):
    for name in ("Alpha", "Beta"):
        await client.post("/api/v1/vendor", json={"data": {"name": name}})

    r = await client.get("/api/v1/vendors")

    assert r.status_code == 200
    body = r.json()
    _assert_envelope(body, "success")
    assert sorted(v["name"] for v in body["data"]) == ["Alpha", "Beta"]
    assert all(v["banking"] is None for v in body["data"])


# ===================== DOCUMENTS =====================


async def test_upload_document(client, storage):
    r = await client.post(
        "/api/v1/upload-vendor-documents",
        data={"documentType": "pan_card"},
        files={"document": ("pan.pdf", PDF, "application/pdf")},
    )

    assert r.status_code == 200
    body = r.json()
    _assert_envelope(body, "success")
    assert body["info"] == "Document pan.pdf uploaded successfully"
    data = body["data"]
    assert data["fileName"] == "pan.pdf"
    assert data["fileType"] == "application/pdf"
    assert data["fileSize"] == len(PDF)
    assert data["documentId"] is None
    assert storage.objects[data["key"]] == PDF


async def test_upload_document_invalid_type(client, storage, engine):
    r = await client.post(
        "/api/v1/upload-vendor-documents",
        data={"documentType": "invalid_type"},
        files={"document": ("pan.pdf", PDF, "application/pdf")},
    )

    assert r.status_code == 400
    assert r.json()["info"].startswith("Invalid document type")
    assert storage.objects == {}
    assert (await table_counts(engine))["vendor_documents"] == 0


async def test_upload_document_invalid_file_type(client, storage):
    r = await client.post(
        "/api/v1/upload-vendor-documents",
        data={"documentType": "gst"},
        files={"document": ("notes.txt", b"plain text", "text/plain")},
    )

    assert r.status_code == 400
    assert "Invalid file type" in r.json()["info"]
    assert storage.objects == {}


async def test_upload_document_over_size_limit(client, storage):
    app.dependency_overrides[get_upload_service] = lambda: DocumentUploadService(storage, 16)

    r = await client.post(
        "/api/v1/upload-vendor-documents",
        data={"documentType": "gst"},
        files={"document": ("big.pdf", b"%PDF" + b"x" * 4096, "application/pdf")},
    )

    assert r.status_code == 400
    assert r.json()["info"].startswith("File size exceeds")
    assert storage.objects == {}


async def test_upload_document_without_file(client, storage):
    r = await client.post("/api/v1/upload-vendor-documents", data={"documentType": "gst"})

    assert r.status_code == 400
    assert r.json()["info"] == "No file provided"


async def test_upload_document_attached_to_vendor(client):
    created = await client.post("/api/v1/vendor", json={"data": {"name": "Paper Trail"}})
    vendor_id = created.json()["data"]["vendorId"]

    r = await client.post(
        "/api/v1/upload-vendor-documents",
        data={"documentType": "gst", "vendorId": vendor_id},
        files={"document": ("gst.png", b"\x89PNG gst", "image/png")},
    )

    assert r.status_code == 200
    document_id = r.json()["data"]["documentId"]
    assert document_id is not None

    vendor = (await client.get(f"/api/v1/vendor/{vendor_id}")).json()["data"]
    assert [d["id"] for d in vendor["documents"]] == [document_id]


async def test_attach_documents(client):
    created = await client.post("/api/v1/vendor", json={"data": {"name": "Attach Co"}})
    vendor_id = created.json()["data"]["vendorId"]

    r = await client.post(
        f"/api/v1/vendor/{vendor_id}/documents",
        json={
            "documents": [
                {"documentType": "pan_card", "fileUrl": "https://x/p.png", "fileKey": "p.png"},
                {"documentType": "other", "fileUrl": "https://x/o.pdf", "fileKey": "o.pdf"},
            ]
        },
    )

    assert r.status_code == 200
    body = r.json()
    _assert_envelope(body, "success")
    assert sorted(d["fileKey"] for d in body["data"]) == ["o.pdf", "p.png"]


async def test_attach_documents_unknown_vendor(client):
    r = await client.post(
        "/api/v1/vendor/00000000-0000-0000-0000-000000000000/documents",
        json={"documents": [{"documentType": "gst", "fileUrl": "https://x/g.pdf", "fileKey": "g.pdf"}]},
    )

    assert r.status_code == 404
    _assert_envelope(r.json(), "error")
