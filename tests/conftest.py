import os
import tempfile

# settings are read at import time
_TEST_DIR = tempfile.mkdtemp(prefix="form_handler_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR}/api.sqlite"
os.environ["UPLOADS_DIR"] = f"{_TEST_DIR}/uploads"
os.environ["BREVO_API_KEY"] = ""
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASS"] = ""
os.environ["ADMIN_EMAIL"] = "admin@example.com"

import pytest
import pytest_asyncio

from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.storage.attachments import AttachmentStorage
from tests.fakes import FakeCrmClient, FakeEmailService


@pytest_asyncio.fixture
async def db_connection(tmp_path):
    connection = DatabaseConnection(url=f"sqlite+aiosqlite:///{tmp_path}/forms.sqlite")
    await connection.create_tables()
    yield connection
    await connection.close()


@pytest.fixture
def storage(tmp_path):
    return AttachmentStorage(tmp_path / "uploads")


@pytest.fixture
def crm_client():
    return FakeCrmClient()


@pytest.fixture
def email_service():
    return FakeEmailService()
