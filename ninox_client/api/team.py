"""
TeamAPI - L0/L1 原子能力层
负责团队与数据库列表的原子接口封装

对应 Ninox API:
- 获取团队列表: GET /teams/
- 获取团队下数据库列表: GET /teams/:team_id/databases
"""

import logging
from typing import List

from ninox_client.core.client import NinoxClient, ensure_success, parse_model_list
from ninox_client.core.errors import AuthenticationError
from ninox_client.schemas import Database, Team

logger = logging.getLogger(__name__)


class TeamAPI:
    """
    Ninox 团队 API 封装 (Base API Layer)

    职责: 列出当前 auth key 可见的团队和数据库
    """

    def __init__(self, client: NinoxClient):
        self.client = client

    async def list_teams(self) -> List[Team]:
        """
        获取团队列表

        API: GET /teams/

        Returns:
            团队列表，每项包含 {id, name}

        Raises:
            AuthenticationError: auth key 无效 (401)
            TransportError: 其他非成功状态
        """
        logger.debug("Listing teams")

        resp = await self.client.get("/teams/")
        if resp.status_code == 401:
            logger.error("获取团队列表失败: auth key 无效")
            raise AuthenticationError(body=resp.text)
        ensure_success(resp, "List teams")

        teams = parse_model_list(resp, Team, "List teams")
        logger.info("Retrieved %d teams", len(teams))
        return teams

    async def list_databases(self, team_id: str) -> List[Database]:
        """
        获取团队下的数据库列表

        API: GET /teams/:team_id/databases

        Args:
            team_id: 团队 ID

        Returns:
            数据库列表，每项包含 {id, name}

        Raises:
            TransportError: 非成功状态
        """
        logger.debug("Listing databases: team_id=%s", team_id)

        resp = await self.client.get(f"/teams/{team_id}/databases")
        ensure_success(resp, "List databases")

        databases = parse_model_list(resp, Database, "List databases")
        logger.info("Retrieved %d databases for team %s", len(databases), team_id)
        return databases
