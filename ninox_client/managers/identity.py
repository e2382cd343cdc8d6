"""
IdentityResolver - 名称解析管理器

Team Name -> Team ID -> Database Name -> Database ID

两级解析必须顺序执行（第二步依赖第一步的 team_id），
整个过程只有两次网络请求：团队列表和数据库列表。
名称匹配是针对列表快照的纯函数，不维护隐藏的查找状态。

使用示例:
    resolver = IdentityResolver(TeamAPI(client))
    identity = await resolver.resolve("My Team", "My Database")
    identity.team_id, identity.database_id
"""

import logging
from typing import List, NamedTuple, Optional, Sequence, TypeVar, Union

from ninox_client.api import TeamAPI
from ninox_client.core.errors import NotFoundError
from ninox_client.schemas import Database, Team

logger = logging.getLogger(__name__)

Named = TypeVar("Named", bound=Union[Team, Database])


class Identity(NamedTuple):
    team_id: str
    database_id: str


def find_by_name(items: Sequence[Named], name: str) -> Optional[Named]:
    """
    按名称精确匹配（区分大小写），有重名时返回第一个

    Returns:
        匹配项，未找到返回 None
    """
    for item in items:
        if item.name == name:
            return item
    return None


class IdentityResolver:
    """
    名称解析管理器 (Manager Layer)

    teams / databases 保存最近一次请求到的列表快照，
    即使解析失败也会更新，便于调用方排查。
    """

    def __init__(self, team_api: TeamAPI):
        self.team_api = team_api
        self.teams: List[Team] = []
        self.databases: List[Database] = []

    async def resolve(self, team_name: str, database_name: str) -> Identity:
        """
        解析团队和数据库名称

        Args:
            team_name: 团队名称
            database_name: 数据库名称

        Returns:
            Identity(team_id, database_id)

        Raises:
            AuthenticationError: auth key 无效
            NotFoundError: 团队或数据库未找到 (kind="team"/"database")
            TransportError: 其他请求失败
        """
        self.teams = await self.team_api.list_teams()

        team = find_by_name(self.teams, team_name)
        if team is None:
            logger.error(
                "Team '%s' not found among %d teams", team_name, len(self.teams)
            )
            raise NotFoundError("team", team_name)
        logger.debug("Resolved team_name='%s' -> team_id='%s'", team_name, team.id)

        self.databases = await self.team_api.list_databases(team.id)

        database = find_by_name(self.databases, database_name)
        if database is None:
            logger.error(
                "Database '%s' not found in team '%s'", database_name, team_name
            )
            raise NotFoundError("database", database_name)
        logger.debug(
            "Resolved database_name='%s' -> database_id='%s'",
            database_name,
            database.id,
        )

        return Identity(team_id=team.id, database_id=database.id)
