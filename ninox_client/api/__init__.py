"""
Ninox API 层 - 原子能力封装

层级依赖拓扑:
- L0: TeamAPI.list_teams (无依赖)
- L1: TeamAPI.list_databases (依赖 team_id)
- L2: RecordAPI / QueryAPI (依赖 team_id, database_id)

使用示例:
    from ninox_client.api import TeamAPI, RecordAPI

    team_api = TeamAPI(client)
    teams = await team_api.list_teams()

    record_api = RecordAPI(client)
    records = await record_api.list_records(team_id, database_id, "A")
"""

from .team import TeamAPI
from .record import RecordAPI
from .query import QueryAPI

__all__ = [
    "TeamAPI",
    "RecordAPI",
    "QueryAPI",
]
