"""
Pytest configuration
Every test gets a fresh file-backed SQLite database under tmp_path.
"""

import pytest
import pytest_asyncio

from config import build_database_url
from database import DatabaseManager
from schemas.comments import CommentCreate
from schemas.files import FileCreate
from schemas.users import UserCreate
from services.gateway import PersistenceGateway


# ==================== Database fixtures ====================

@pytest.fixture(scope="function")
def database_url(tmp_path) -> str:
    return build_database_url(tmp_path / "test.sqlite")


@pytest_asyncio.fixture(scope="function")
async def gateway(database_url):
    """
    Initialized gateway over an empty database
    """
    gateway = PersistenceGateway(DatabaseManager(database_url, echo=False))
    await gateway.initialize()

    yield gateway

    await gateway.close()


# ==================== Test data fixtures ====================

@pytest_asyncio.fixture(scope="function")
async def test_user(gateway):
    return await gateway.users.create_user(
        UserCreate(
            external_id="google-123",
            email="owner@example.com",
            name="Owner",
            picture="https://example.com/owner.png",
        )
    )


@pytest_asyncio.fixture(scope="function")
async def test_file(gateway, test_user):
    return await gateway.files.create_file(
        FileCreate(
            filename="1718000000000-report.pdf",
            original_name="report.pdf",
            file_path="uploads/1718000000000-report.pdf",
            file_size=2048,
            mime_type="application/pdf",
            description="Quarterly report",
            uploaded_by=test_user.id,
        )
    )


@pytest_asyncio.fixture(scope="function")
async def test_comment(gateway, test_user, test_file):
    return await gateway.comments.create_comment(
        CommentCreate(file_id=test_file.id, user_id=test_user.id, content="Looks good")
    )
