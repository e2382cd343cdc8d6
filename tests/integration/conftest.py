"""
Integration Test Configuration
集成测试配置 - 连接真实 Ninox 后端

必须配置的环境变量:
- NINOX_AUTH_KEY
- NINOX_TEAM
- NINOX_DATABASE
- NINOX_TABLE (测试会在该表中创建并删除临时记录)
"""

import pytest
import pytest_asyncio

from ninox_client.core.config import settings
from ninox_client.session import NinoxSession


# =============================================================================
# Skip Condition: Check if credentials are available
# =============================================================================
def _has_credentials() -> bool:
    """Check if Ninox credentials and a test table are configured."""
    return bool(
        settings.NINOX_AUTH_KEY
        and settings.NINOX_TEAM
        and settings.NINOX_DATABASE
        and settings.NINOX_TABLE
    )


skip_without_credentials = pytest.mark.skipif(
    not _has_credentials(),
    reason="Ninox credentials not configured (need NINOX_AUTH_KEY, TEAM, DATABASE, TABLE)",
)


# =============================================================================
# Fixtures
# =============================================================================
@pytest_asyncio.fixture
async def live_session():
    """已认证的真实会话，测试结束后关闭连接"""
    session = NinoxSession()
    await session.auth()
    yield session
    await session.close()


@pytest.fixture
def test_table():
    """Return the test table id (from env)."""
    return settings.NINOX_TABLE
