"""
RecordAPI - L2 原子能力层
负责表记录 CRUD 的原子接口封装

对应 Ninox API:
- 查询记录列表: GET /teams/:tid/databases/:did/tables/:table/records
- 获取单条记录: GET .../records/:id
- 创建/更新记录: POST .../records
- 删除记录: DELETE .../records/:id
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ninox_client.core.client import (
    NinoxClient,
    ensure_success,
    parse_json,
    parse_model,
    parse_model_list,
)
from ninox_client.core.errors import TransportError
from ninox_client.core.config import settings
from ninox_client.schemas import NinoxRecord, RecordId, SaveResult

logger = logging.getLogger(__name__)


def _table_path(team_id: str, database_id: str, table: str) -> str:
    return f"/teams/{team_id}/databases/{database_id}/tables/{table}"


class RecordAPI:
    """
    Ninox 记录 API 封装 (Base API Layer)

    职责: 对应 records 相关的原子接口，不做字段裁剪
    依赖: team_id 和 database_id (由 IdentityResolver 解析得到)
    """

    def __init__(self, client: NinoxClient, max_page_size: Optional[int] = None):
        self.client = client
        self.max_page_size = max_page_size or settings.NINOX_MAX_PAGE_SIZE

    async def list_records(
        self,
        team_id: str,
        database_id: str,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[NinoxRecord]:
        """
        查询表中符合条件的记录

        一次请求最大页数，不做客户端分页；后端截断时原样返回。

        Args:
            team_id: 团队 ID
            database_id: 数据库 ID
            table: 表 ID
            filters: 字段过滤条件 {field_name: criterion}，为空表示全部

        Returns:
            记录列表，保持后端返回顺序
        """
        params: Dict[str, Any] = {
            "pages": self.max_page_size,
            "perPage": self.max_page_size,
        }
        if filters:
            params["filters"] = json.dumps({"fields": filters})

        logger.debug("Listing records: table=%s, filters=%s", table, filters)

        resp = await self.client.get(
            f"{_table_path(team_id, database_id, table)}/records", params=params
        )
        ensure_success(resp, "List records")

        records = parse_model_list(resp, NinoxRecord, "List records")
        logger.info("Retrieved %d records from table %s", len(records), table)
        return records

    async def get_record(
        self, team_id: str, database_id: str, table: str, record_id: RecordId
    ) -> NinoxRecord:
        """
        获取单条记录

        Raises:
            TransportError: 记录不存在等非成功状态，携带后端状态码和响应体
        """
        logger.debug("Getting record: table=%s, id=%s", table, record_id)

        resp = await self.client.get(
            f"{_table_path(team_id, database_id, table)}/records/{record_id}"
        )
        ensure_success(resp, f"Get record {record_id}")
        return parse_model(resp, NinoxRecord, f"Get record {record_id}")

    async def save_records(
        self,
        team_id: str,
        database_id: str,
        table: str,
        records: Sequence[Union[NinoxRecord, Dict[str, Any]]],
    ) -> SaveResult:
        """
        保存记录: 不带 id 的新建，带 id 的更新（由后端区分）

        Args:
            records: 记录列表，dict 原样透传，NinoxRecord 按别名序列化

        Returns:
            SaveResult(success, ids)，ids 与提交顺序一致
        """
        payload = [
            record.to_payload() if isinstance(record, NinoxRecord) else record
            for record in records
        ]

        logger.debug("Saving %d records to table %s", len(payload), table)

        resp = await self.client.post(
            f"{_table_path(team_id, database_id, table)}/records", json=payload
        )
        ensure_success(resp, "Save records")

        saved = parse_json(resp, "Save records")
        if not isinstance(saved, list) or not all(
            isinstance(item, dict) for item in saved
        ):
            logger.error("Save records returned unexpected payload: %s", saved)
            raise TransportError(
                "Save records returned unexpected payload",
                status=resp.status_code,
                body=saved,
            )

        ids = [item.get("id") for item in saved]
        logger.info("Saved %d records to table %s", len(ids), table)
        return SaveResult(success=resp.status_code == 200, ids=ids)

    async def delete_record(
        self, team_id: str, database_id: str, table: str, record_id: RecordId
    ) -> bool:
        """
        删除单条记录

        Returns:
            HTTP 200 时为 True
        """
        logger.debug("Deleting record: table=%s, id=%s", table, record_id)

        resp = await self.client.delete(
            f"{_table_path(team_id, database_id, table)}/records/{record_id}"
        )
        if resp.status_code != 200:
            logger.warning(
                "删除记录失败: table=%s, id=%s, status=%d",
                table,
                record_id,
                resp.status_code,
            )
            return False
        return True
