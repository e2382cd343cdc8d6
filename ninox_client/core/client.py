"""
Ninox API 异步 HTTP 客户端 (Transport Layer)

特性:
- 通过 httpx.Auth 自动注入 Authorization: Bearer <authKey>
- 统一的 Content-Type: application/json
- 网络错误统一转换为 TransportError
- 不做重试，失败直接抛给调用方
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ninox_client.core.config import settings
from ninox_client.core.errors import TransportError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _mask_token(token: str, visible_chars: int = 4) -> str:
    """对 token 进行脱敏处理，仅显示前几个字符"""
    if not token or len(token) <= visible_chars:
        return "***"
    return f"{token[:visible_chars]}***"


def _response_body(response: httpx.Response) -> Any:
    """尽量以 JSON 解析响应体，失败时返回文本"""
    try:
        return response.json()
    except ValueError:
        return response.text


def ensure_success(response: httpx.Response, action: str) -> httpx.Response:
    """
    检查响应状态码，非 2xx 时抛出 TransportError

    Args:
        response: httpx 响应
        action: 操作描述，用于日志和异常信息

    Returns:
        原响应（便于链式调用）

    Raises:
        TransportError: 状态码不是 2xx
    """
    if response.is_success:
        return response

    body = _response_body(response)
    logger.error(
        "%s failed: status=%d, body=%s",
        action,
        response.status_code,
        response.text[:200],
    )
    raise TransportError(f"{action} failed", status=response.status_code, body=body)


def _unexpected_payload(response: httpx.Response, action: str, body: Any):
    logger.error(
        "%s returned unexpected payload: status=%d, body=%s",
        action,
        response.status_code,
        response.text[:200],
    )
    return TransportError(
        f"{action} returned unexpected payload",
        status=response.status_code,
        body=body,
    )


def parse_json(response: httpx.Response, action: str) -> Any:
    """
    解析 2xx 响应的 JSON 体

    Raises:
        TransportError: 响应体不是合法 JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise _unexpected_payload(response, action, response.text) from e


def parse_model(
    response: httpx.Response, model: Type[ModelT], action: str
) -> ModelT:
    """将响应体校验为单个模型，格式不符时抛出 TransportError"""
    data = parse_json(response, action)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise _unexpected_payload(response, action, data) from e


def parse_model_list(
    response: httpx.Response, model: Type[ModelT], action: str
) -> List[ModelT]:
    """将响应体校验为模型列表，响应不是列表或元素格式不符时抛出 TransportError"""
    data = parse_json(response, action)
    if not isinstance(data, list):
        raise _unexpected_payload(response, action, data)
    try:
        return [model.model_validate(item) for item in data]
    except ValidationError as e:
        raise _unexpected_payload(response, action, data) from e


class BearerAuth(httpx.Auth):
    """
    Auth for the Ninox API.
    Injects the Authorization header into every request.
    """

    def __init__(self, auth_key: str):
        self.auth_key = auth_key

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self.auth_key}"
        yield request


class NinoxClient:
    """
    Ninox API 异步客户端

    base_url 形如 https://api.ninoxdb.de/v1，所有 path 都相对于该地址。
    """

    def __init__(
        self,
        auth_key: str,
        base_uri: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_uri = (base_uri or settings.NINOX_API_URI).rstrip("/")
        self.version = version or settings.NINOX_API_VERSION
        self.base_url = f"{self.base_uri}/v{self.version}"
        self.auth_key = auth_key

        logger.info(
            "Initializing NinoxClient with base_url=%s, auth_key=%s",
            self.base_url,
            _mask_token(auth_key),
        )
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            auth=BearerAuth(auth_key),
            timeout=httpx.Timeout(timeout or settings.NINOX_HTTP_TIMEOUT),
            trust_env=False,
        )

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
        content: Optional[bytes] = None,
    ) -> httpx.Response:
        """
        发送请求

        Args:
            method: HTTP 方法 (GET, POST, DELETE)
            path: API 路径 (相对于 base_url)
            json: JSON 请求体 (可选)
            params: 查询参数 (可选)
            content: 原始请求体 (可选，与 json 互斥)

        Returns:
            httpx.Response，状态码由调用方判断

        Raises:
            TransportError: 网络错误、超时
        """
        logger.debug("Making %s request to %s", method, path)
        if json is not None:
            logger.debug("%s payload: %s", method, json)

        try:
            response = await self.client.request(
                method, path, json=json, params=params, content=content
            )
        except httpx.TimeoutException as e:
            logger.error("%s %s timed out: %s", method, path, e)
            raise TransportError(f"Request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            logger.error("%s %s failed (network error): %s", method, path, e)
            raise TransportError(f"Connection error: {e}") from e

        if response.status_code >= 400:
            logger.warning(
                "HTTP error %d from %s %s", response.status_code, method, path
            )
        else:
            logger.info(
                "Request successful: %s %s -> %d",
                method,
                path,
                response.status_code,
            )
        return response

    async def get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        """GET 请求"""
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, json: Any = None, content: Optional[bytes] = None
    ) -> httpx.Response:
        """POST 请求"""
        return await self.request("POST", path, json=json, content=content)

    async def delete(self, path: str) -> httpx.Response:
        """DELETE 请求"""
        return await self.request("DELETE", path)

    async def close(self):
        """关闭客户端连接"""
        logger.info("Closing NinoxClient connection")
        await self.client.aclose()
