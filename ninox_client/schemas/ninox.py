from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ninox_client.core.config import settings

# Ninox 的记录 id 通常是整数，但客户端视其为不透明值
RecordId = Union[int, str]


class Team(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Database(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class NinoxRecord(BaseModel):
    """
    一条表记录

    示例:
        {
            "id": 6,
            "sequence": 97,
            "createdAt": "2022-06-28T19:35:01",
            "createdBy": "xxx",
            "modifiedAt": "2022-07-02T12:34:39",
            "modifiedBy": "xxx",
            "fields": {"Name": "My Deliverable"},
        }
    """

    id: Optional[RecordId] = None
    sequence: Optional[int] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    modified_at: Optional[str] = Field(default=None, alias="modifiedAt")
    modified_by: Optional[str] = Field(default=None, alias="modifiedBy")
    fields: Dict[str, Any] = Field(default_factory=dict)

    # 保留后端新增的字段，写回时原样透传
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """序列化为写入请求体，仅包含显式设置过的键"""
        payload = self.model_dump(by_alias=True, exclude_unset=True)
        payload.update(self.model_extra or {})
        return payload


class SaveResult(BaseModel):
    success: bool
    ids: List[RecordId] = Field(default_factory=list)


QueryKind = Literal["number", "string", "boolean", "list", "object", "null"]


class QueryResult(BaseModel):
    """
    query / exec 的返回结果

    value 保持后端原值不变，kind 标记其类型，调用方按 kind 分支处理。
    """

    kind: QueryKind
    value: Any = None

    @classmethod
    def from_raw(cls, value: Any) -> "QueryResult":
        if value is None:
            kind = "null"
        # bool 是 int 的子类，必须先判断
        elif isinstance(value, bool):
            kind = "boolean"
        elif isinstance(value, (int, float)):
            kind = "number"
        elif isinstance(value, str):
            kind = "string"
        elif isinstance(value, list):
            kind = "list"
        else:
            kind = "object"
        return cls(kind=kind, value=value)


class NinoxOptions(BaseModel):
    """
    auth() 的配置

    示例:
        {
            "uri": "https://api.ninoxdb.de",
            "version": "1",
            "authKey": "xxxxxx-xxxxx-xxxx-xxxx-xxxxxxxxxxxx",
            "team": "YOUR_TEAM_NAME",
            "database": "YOUR_DATABASE_NAME",
        }
    """

    uri: Optional[str] = None
    version: Optional[str] = None
    auth_key: Optional[str] = Field(default=None, alias="authKey")
    team: Optional[str] = None
    database: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_settings(cls) -> "NinoxOptions":
        """从环境变量 (NINOX_*) 构造"""
        return cls(
            uri=settings.NINOX_API_URI,
            version=settings.NINOX_API_VERSION,
            auth_key=settings.NINOX_AUTH_KEY,
            team=settings.NINOX_TEAM,
            database=settings.NINOX_DATABASE,
        )
