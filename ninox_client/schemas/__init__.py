from .ninox import (
    Database,
    NinoxOptions,
    NinoxRecord,
    QueryResult,
    RecordId,
    SaveResult,
    Team,
)

__all__ = [
    "Database",
    "NinoxOptions",
    "NinoxRecord",
    "QueryResult",
    "RecordId",
    "SaveResult",
    "Team",
]
