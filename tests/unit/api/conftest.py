"""
API 测试共享 Fixtures

提供 API 测试中通用的 Mock 对象和辅助函数。
"""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock

import httpx
import pytest


def create_mock_response(
    data: Any = None, status_code: int = 200, content: bytes | None = None
) -> httpx.Response:
    """
    创建模拟 HTTP 响应对象。

    Args:
        data: 响应 JSON 数据
        status_code: HTTP 状态码
        content: 原始响应体（优先于 data）

    Returns:
        httpx.Response
    """
    if content is not None:
        return httpx.Response(status_code, content=content)
    return httpx.Response(status_code, json=data)


@pytest.fixture
def mock_response() -> Callable[..., httpx.Response]:
    return create_mock_response


@pytest.fixture
def mock_client():
    """模拟 NinoxClient"""
    return AsyncMock()
