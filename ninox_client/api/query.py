"""
QueryAPI - L2 原子能力层
负责 NX Script 查询、脚本执行与附件下载

对应 Ninox API:
- 查询: GET /teams/:tid/databases/:did/query?query=...
- 查询 (原始请求体): POST /teams/:tid/databases/:did/query
- 执行脚本: POST /teams/:tid/databases/:did/exec
- 下载附件: GET .../tables/:table/records/:rid/files/:file_name
"""

import logging
from typing import Any

import httpx

from ninox_client.core.client import NinoxClient, ensure_success
from ninox_client.schemas import QueryResult, RecordId

logger = logging.getLogger(__name__)


def _database_path(team_id: str, database_id: str) -> str:
    return f"/teams/{team_id}/databases/{database_id}"


def _parse_result(resp: httpx.Response) -> Any:
    # 后端一般返回 JSON，但部分脚本结果是纯文本
    try:
        return resp.json()
    except ValueError:
        return resp.text


class QueryAPI:
    """Ninox 查询与脚本 API 封装 (Base API Layer)"""

    def __init__(self, client: NinoxClient):
        self.client = client

    async def query(
        self, team_id: str, database_id: str, expression: str, method: str = "GET"
    ) -> QueryResult:
        """
        发送 NX Script 查询

        示例:
            await api.query(tid, did, "first((select Customer['First Name'=\"John\"])).Id")

        Args:
            team_id: 团队 ID
            database_id: 数据库 ID
            expression: 查询表达式
            method: "GET" 以 query 参数提交，"POST" 以原始请求体提交

        Returns:
            QueryResult，value 为后端原值（数字、字符串或列表）
        """
        path = f"{_database_path(team_id, database_id)}/query"
        logger.debug("Running query (%s): %s", method, expression)

        if method == "GET":
            resp = await self.client.get(path, params={"query": expression})
        elif method == "POST":
            resp = await self.client.post(path, content=expression.encode("utf-8"))
        else:
            raise ValueError(f"Unsupported query method: {method}")

        ensure_success(resp, "Query")
        return QueryResult.from_raw(_parse_result(resp))

    async def exec(self, team_id: str, database_id: str, script: str) -> QueryResult:
        """
        执行 NX Script 脚本（可写入数据）

        API: POST /teams/:tid/databases/:did/exec, body {"query": script}
        """
        logger.debug("Executing script: %s", script)

        resp = await self.client.post(
            f"{_database_path(team_id, database_id)}/exec", json={"query": script}
        )
        ensure_success(resp, "Exec")
        return QueryResult.from_raw(_parse_result(resp))

    async def get_file(
        self,
        team_id: str,
        database_id: str,
        table: str,
        record_id: RecordId,
        file_name: str,
    ) -> bytes:
        """
        下载记录附件，整个文件读入内存

        Returns:
            文件原始内容
        """
        logger.debug(
            "Getting file: table=%s, record_id=%s, file_name=%s",
            table,
            record_id,
            file_name,
        )

        resp = await self.client.get(
            f"{_database_path(team_id, database_id)}/tables/{table}"
            f"/records/{record_id}/files/{file_name}"
        )
        ensure_success(resp, f"Get file {file_name}")
        logger.info("Downloaded file %s (%d bytes)", file_name, len(resp.content))
        return resp.content
