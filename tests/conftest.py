import os

import pytest
import pytest_asyncio
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from gluestick import connect, disconnect, disable_tracing
from gluestick.core.connection import _connections

TEST_MONGO_URI = os.environ.get(
    "GLUESTICK_TEST_MONGO_URI", "mongodb://localhost:27017/gluestick_test"
)


def _server_available(uri: str) -> bool:
    client = MongoClient(uri, serverSelectionTimeoutMS=500)
    try:
        client.admin.command("ping")
        return True
    except PyMongoError:
        return False
    finally:
        client.close()


@pytest.fixture(scope="session")
def mongo_available() -> bool:
    return _server_available(TEST_MONGO_URI)


@pytest_asyncio.fixture
async def mongo_connection(mongo_available):
    """Connect to the test MongoDB before a test, drop its collections after."""
    if not mongo_available:
        pytest.skip(f"MongoDB not reachable at {TEST_MONGO_URI}")
    db = await connect(TEST_MONGO_URI)
    yield db
    # Reconnect if the test disconnected (e.g., connection tests)
    if "default" not in _connections:
        db = await connect(TEST_MONGO_URI)
    for name in await db.list_collection_names():
        await db.drop_collection(name)
    await disconnect()


@pytest.fixture(autouse=True)
def reset_tracing():
    yield
    disable_tracing()


@pytest.fixture(scope="session")
def mongo_uri() -> str:
    return TEST_MONGO_URI
