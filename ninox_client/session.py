"""
NinoxSession - 会话层 (Service Layer)

串联 IdentityResolver、RecordAPI、QueryAPI 和字段裁剪，提供面向表名/记录的接口。

生命周期:
1. 创建空会话
2. auth() 解析 team/database，会话进入 ready 状态
3. 记录与查询操作使用已解析的 team_id/database_id

使用示例:
    session = NinoxSession()
    await session.auth({
        "authKey": "xxxxxx-xxxxx-xxxx-xxxx-xxxxxxxxxxxx",
        "team": "YOUR_TEAM_NAME",
        "database": "YOUR_DATABASE_NAME",
    })
    records = await session.get_records("A", fields_to_extract=["Name"])
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ninox_client.api import QueryAPI, RecordAPI, TeamAPI
from ninox_client.core.client import NinoxClient
from ninox_client.core.config import settings
from ninox_client.core.errors import (
    ConfigurationError,
    SessionNotReadyError,
    TransportError,
)
from ninox_client.field_projector import project_fields
from ninox_client.managers import IdentityResolver
from ninox_client.schemas import (
    Database,
    NinoxOptions,
    NinoxRecord,
    QueryResult,
    RecordId,
    SaveResult,
    Team,
)

logger = logging.getLogger(__name__)

_session: Optional["NinoxSession"] = None
_session_lock = threading.Lock()  # 线程安全锁


class NinoxSession:
    """
    Ninox 会话

    设计说明:
    - team_id 和 database_id 要么同时为 None，要么同时已设置
    - 重新 auth() 成功后整体替换解析结果和底层连接；失败时保留之前的状态，
      只刷新 teams / databases 列表快照
    - close() 后回到未认证状态，team_id / database_id 同时清空
    - 不做内部加锁，重新 auth() 前调用方需要等待进行中的请求完成
    """

    def __init__(self):
        self.base_uri: str = settings.NINOX_API_URI
        self.api_version: str = settings.NINOX_API_VERSION
        self.auth_key: Optional[str] = None
        self.team_id: Optional[str] = None
        self.database_id: Optional[str] = None
        self.teams: List[Team] = []
        self.databases: List[Database] = []

        self._client: Optional[NinoxClient] = None
        self._record_api: Optional[RecordAPI] = None
        self._query_api: Optional[QueryAPI] = None

    @property
    def ready(self) -> bool:
        return self.team_id is not None and self.database_id is not None

    def _require_ready(self) -> Tuple[str, str]:
        if not self.ready:
            raise SessionNotReadyError()
        return self.team_id, self.database_id

    # ========== Auth ==========

    async def auth(
        self, options: Union[NinoxOptions, Dict[str, Any], None] = None
    ) -> "NinoxSession":
        """
        认证并解析 team / database

        Args:
            options: NinoxOptions 或 dict {uri?, version?, authKey, team, database}，
                     不传时从环境变量读取

        Returns:
            self，便于链式调用

        Raises:
            ConfigurationError: 缺少或非法的 authKey / team / database（不发起请求）
            AuthenticationError: auth key 无效
            NotFoundError: 团队或数据库未找到
            TransportError: 其他请求失败
        """
        if options is None:
            options = NinoxOptions.from_settings()
        elif isinstance(options, dict):
            try:
                options = NinoxOptions.model_validate(options)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid options: {e}") from e

        if not options.auth_key:
            raise ConfigurationError("authKey is required")
        if not options.team:
            raise ConfigurationError("team is required")
        if not options.database:
            raise ConfigurationError("database is required")

        base_uri = options.uri or settings.NINOX_API_URI
        api_version = options.version or settings.NINOX_API_VERSION

        client = NinoxClient(options.auth_key, base_uri=base_uri, version=api_version)
        resolver = IdentityResolver(TeamAPI(client))
        try:
            identity = await resolver.resolve(options.team, options.database)
        except Exception:
            await client.close()
            raise
        finally:
            self.teams = resolver.teams
            self.databases = resolver.databases

        previous_client = self._client

        self.base_uri = base_uri
        self.api_version = api_version
        self.auth_key = options.auth_key
        self.team_id = identity.team_id
        self.database_id = identity.database_id
        self._client = client
        self._record_api = RecordAPI(client)
        self._query_api = QueryAPI(client)

        if previous_client is not None:
            await previous_client.close()

        logger.info(
            "Auth successful: team_id=%s, database_id=%s",
            self.team_id,
            self.database_id,
        )
        return self

    # ========== Records ==========

    @staticmethod
    def _project(
        record: NinoxRecord,
        fields_to_extract: Optional[Iterable[str]],
        fields_to_exclude: Optional[Iterable[str]],
    ) -> NinoxRecord:
        if not fields_to_extract and not fields_to_exclude:
            return record
        return record.model_copy(
            update={
                "fields": project_fields(
                    record.fields, fields_to_extract, fields_to_exclude
                )
            }
        )

    async def get_records(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        fields_to_extract: Optional[Iterable[str]] = None,
        fields_to_exclude: Optional[Iterable[str]] = None,
    ) -> List[NinoxRecord]:
        """
        获取表中符合过滤条件的全部记录

        Args:
            table: 表 ID
            filters: 过滤条件 (见 https://docs.ninox.com/)
            fields_to_extract: 只保留这些字段
            fields_to_exclude: 去掉这些字段
        """
        team_id, database_id = self._require_ready()
        records = await self._record_api.list_records(
            team_id, database_id, table, filters
        )
        # 每条记录都要用到同一组 key，先固定为列表
        if fields_to_extract is not None:
            fields_to_extract = list(fields_to_extract)
        if fields_to_exclude is not None:
            fields_to_exclude = list(fields_to_exclude)
        return [
            self._project(record, fields_to_extract, fields_to_exclude)
            for record in records
        ]

    async def get_record(
        self,
        table: str,
        record_id: RecordId,
        fields_to_extract: Optional[Sequence[str]] = None,
        fields_to_exclude: Optional[Sequence[str]] = None,
    ) -> NinoxRecord:
        """按 id 获取单条记录，字段裁剪规则与 get_records 相同"""
        team_id, database_id = self._require_ready()
        record = await self._record_api.get_record(
            team_id, database_id, table, record_id
        )
        return self._project(record, fields_to_extract, fields_to_exclude)

    async def save_records(
        self,
        table: str,
        records: Sequence[Union[NinoxRecord, Dict[str, Any]]],
    ) -> SaveResult:
        """
        保存记录，不带 id 的新建，带 id 的更新

        示例:
            await session.save_records("A", [
                {"id": "1", "fields": {"field1": "value1"}},
                {"fields": {"field1": "value2"}},
            ])
        """
        team_id, database_id = self._require_ready()
        return await self._record_api.save_records(
            team_id, database_id, table, records
        )

    async def delete_record(self, table: str, record_id: RecordId) -> bool:
        """删除单条记录，HTTP 200 时返回 True"""
        team_id, database_id = self._require_ready()
        return await self._record_api.delete_record(
            team_id, database_id, table, record_id
        )

    async def delete_records(self, table: str, ids: Iterable[RecordId]) -> bool:
        """
        逐条删除记录（很慢）

        顺序执行，某条失败后继续删除剩余记录，只要有一条失败就返回 False。
        需要逐条失败信息时请直接调用 delete_record。
        """
        self._require_ready()

        result = True
        for record_id in ids:
            try:
                deleted = await self.delete_record(table, record_id)
            except TransportError as e:
                logger.warning(
                    "Failed to delete record: table=%s, id=%s, error=%s",
                    table,
                    record_id,
                    e,
                )
                deleted = False
            result = result and deleted
        return result

    # ========== Query / Exec / Files ==========

    async def query(self, expression: str, method: str = "GET") -> QueryResult:
        """
        发送 NX Script 查询

        示例:
            result = await session.query(
                "first((select Customer['First Name'=\"John\" and Age >= 21])).Id"
            )
            result.value  # "A6"，表前缀 + 记录 id
        """
        team_id, database_id = self._require_ready()
        return await self._query_api.query(team_id, database_id, expression, method)

    async def exec(self, script: str) -> QueryResult:
        """执行 NX Script 脚本"""
        team_id, database_id = self._require_ready()
        return await self._query_api.exec(team_id, database_id, script)

    async def get_file(
        self, table: str, record_id: RecordId, file_name: str
    ) -> bytes:
        """下载记录附件"""
        team_id, database_id = self._require_ready()
        return await self._query_api.get_file(
            team_id, database_id, table, record_id, file_name
        )

    # ========== Lifecycle ==========

    async def close(self):
        """
        关闭底层连接并清空解析结果

        关闭后会话回到未认证状态，后续操作抛出 SessionNotReadyError，
        需要重新 auth()。teams / databases 快照保留。
        """
        client = self._client

        self.team_id = None
        self.database_id = None
        self._client = None
        self._record_api = None
        self._query_api = None

        if client is not None:
            await client.close()

    async def __aenter__(self) -> "NinoxSession":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


def get_session() -> NinoxSession:
    """
    获取全局共享会话（线程安全）

    使用双重检查锁定模式，防止多线程并发时重复实例化。

    Returns:
        NinoxSession: 全局会话实例（首次获取时尚未认证）
    """
    global _session

    # 快速路径：已初始化则直接返回
    if _session is not None:
        return _session

    # 慢路径：使用锁保护初始化
    with _session_lock:
        if _session is None:
            logger.debug("Creating new NinoxSession singleton instance")
            _session = NinoxSession()

    return _session
