"""
Managers 模块

提供名称到 ID 的解析能力。
"""

from .identity import Identity, IdentityResolver, find_by_name

__all__ = ["Identity", "IdentityResolver", "find_by_name"]
