"""
Test fixtures - temporary SQLite database, fake object storage, HTTP client
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

import vendor_onboarding.domain  # noqa: F401  (registers every table on Base.metadata)
from vendor_onboarding.core.exceptions import QueryError
from vendor_onboarding.db.base import Base, build_engine, get_engine
from vendor_onboarding.db.gateway import DatabaseGateway
from vendor_onboarding.main import app
from vendor_onboarding.routers.dependencies import get_storage
from vendor_onboarding.schemas.document import UploadedDocument
from vendor_onboarding.services.vendor import VendorService


class FakeStorage:
    """In-memory stand-in for S3DocumentStorage."""

    def __init__(self):
        self.objects = {}
        self.deleted = []

    async def upload(self, contents, filename, content_type, document_type):
        key = f"vendors/{document_type.value}/{len(self.objects) + 1}-{filename}"
        self.objects[key] = contents
        return UploadedDocument(
            url=f"https://test-bucket.s3.ap-south-1.amazonaws.com/{key}",
            key=key,
            file_name=filename,
            file_type=content_type,
            file_size=len(contents),
            document_type=document_type,
        )

    async def delete(self, key):
        self.deleted.append(key)
        self.objects.pop(key, None)


class FailingGateway(DatabaseGateway):
    """Gateway whose N-th executed statement fails like a constraint violation."""

    def __init__(self, engine, fail_on_call):
        super().__init__(engine)
        self.fail_on_call = fail_on_call
        self.calls = 0

    async def execute(self, statement, parameters=None):
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise QueryError(str(statement), RuntimeError("forced failure"))
        return await super().execute(statement, parameters)


async def table_counts(engine):
    """Row count of every table, keyed by table name."""
    counts = {}
    async with engine.connect() as conn:
        for table in Base.metadata.sorted_tables:
            result = await conn.execute(select(func.count()).select_from(table))
            counts[table.name] = result.scalar_one()
    return counts


def vendor_form(**overrides):
    """A fully populated registration form (banking, one custom field, one document)."""
    form = {
        "name": "Shree Ganesh Traders",
        "tradeName": "SG Traders",
        "emailId": "accounts@sgtraders.in",
        "phoneNumber": "+91 98200 12345",
        "typeOfOrganization": "Partnership",
        "natureOfBusiness": "Industrial supplies",
        "workingHours": "09:00-18:00",
        "bankName": "HDFC Bank",
        "branchAddress": "Fort, Mumbai",
        "branchPhoneNumber": "022 2200 1100",
        "accountNumber": "50100123456789",
        "typeOfAccount": "current",
        "ifscCode": "HDFC0000060",
        "panNumber": "AAAFS1234K",
        "aadharNumber": "123412341234",
        "gstNumber": "27AAAFS1234K1Z5",
        "pfRegistrationNumber": "MHBAN0012345000",
        "esicRegistrationNumber": "31000123450001001",
        "customFields": {"msmeNumber": "UDYAM-MH-19-0012345"},
        "documents": [
            {
                "document_type": "cancelled_cheque",
                "file_url": "https://test-bucket.s3.ap-south-1.amazonaws.com/vendors/cancelled_cheque/a.pdf",
                "file_key": "vendors/cancelled_cheque/a.pdf",
            }
        ],
    }
    form.update(overrides)
    return form


@pytest_asyncio.fixture()
async def engine(tmp_path):
    """Fresh file-backed SQLite database for each test (separate connections share it)"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'vendors.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
def service(engine):
    return VendorService(engine)


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest_asyncio.fixture()
async def client(engine, storage):
    """httpx AsyncClient bound to the FastAPI app"""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
