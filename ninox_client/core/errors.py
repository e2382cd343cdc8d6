"""
Ninox 客户端异常体系

所有异常均继承自 NinoxError，调用方可以统一捕获。
"""

from typing import Any, Optional


class NinoxError(Exception):
    """Base error for the Ninox client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(NinoxError):
    """缺少必需的配置项（authKey / team / database），不会发起网络请求"""


class SessionNotReadyError(NinoxError):
    """在 auth() 成功之前调用了记录或查询操作"""

    def __init__(self, message: str = "Database and team are required. Call auth() first"):
        super().__init__(message)


class NotFoundError(NinoxError):
    """名称解析失败，kind 表示是哪一级查找失败 ("team" 或 "database")"""

    def __init__(self, kind: str, name: Optional[str] = None):
        message = f"{kind.capitalize()} not found"
        if name:
            message = f"{message}: '{name}'"
        super().__init__(message)
        self.kind = kind
        self.name = name


class TransportError(NinoxError):
    """非成功的 HTTP 状态或网络错误，status 为 None 表示请求未得到响应"""

    def __init__(
        self, message: str, status: Optional[int] = None, body: Any = None
    ):
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status})"


class AuthenticationError(NinoxError):
    """后端拒绝了 auth key (HTTP 401)"""

    def __init__(self, message: str = "Invalid auth key", body: Any = None):
        super().__init__(message)
        self.status = 401
        self.body = body
