"""
Ninox Client - Ninox 数据库 REST API 异步客户端

Layers:
- core: 配置、异常和 HTTP 传输
- api: 原子接口 (teams / records / query)
- managers: 名称解析 (team / database name -> id)
- session: 面向调用方的会话
"""

from ninox_client.core.errors import (
    AuthenticationError,
    ConfigurationError,
    NinoxError,
    NotFoundError,
    SessionNotReadyError,
    TransportError,
)
from ninox_client.field_projector import exclude_fields, extract_fields
from ninox_client.schemas import NinoxOptions, NinoxRecord, QueryResult, SaveResult
from ninox_client.session import NinoxSession, get_session

__version__ = "0.1.0"
__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "NinoxError",
    "NinoxOptions",
    "NinoxRecord",
    "NinoxSession",
    "NotFoundError",
    "QueryResult",
    "SaveResult",
    "SessionNotReadyError",
    "TransportError",
    "exclude_fields",
    "extract_fields",
    "get_session",
]
