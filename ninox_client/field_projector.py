"""
字段裁剪 (Field Projector)

纯函数，不依赖 Session 和网络:
- extract_fields: 只保留指定字段，且丢弃值为空/假值的字段
- exclude_fields: 去掉指定字段，其余字段原样保留（包括假值）
"""

from typing import Any, Dict, Iterable, Mapping, Optional


def extract_fields(fields: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """
    只保留 keys 中列出的字段

    输出顺序跟随 keys；源数据中缺失或为假值的字段不会写入。

    >>> extract_fields({"a": 1, "b": 0, "c": "x"}, ["a", "b", "c", "d"])
    {'a': 1, 'c': 'x'}
    """
    result: Dict[str, Any] = {}
    for key in keys:
        if fields.get(key):
            result[key] = fields[key]
    return result


def exclude_fields(fields: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """
    去掉 keys 中列出的字段，保持源顺序

    >>> exclude_fields({"a": 1, "b": 0, "c": "x"}, ["b"])
    {'a': 1, 'c': 'x'}
    """
    excluded = set(keys)
    return {key: value for key, value in fields.items() if key not in excluded}


def project_fields(
    fields: Mapping[str, Any],
    fields_to_extract: Optional[Iterable[str]] = None,
    fields_to_exclude: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """先 extract 再 exclude，空列表跳过对应步骤"""
    result = dict(fields)
    if fields_to_extract:
        result = extract_fields(result, fields_to_extract)
    if fields_to_exclude:
        result = exclude_fields(result, fields_to_exclude)
    return result
