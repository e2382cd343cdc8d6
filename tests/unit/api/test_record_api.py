"""
RecordAPI 测试模块

测试覆盖:
1. list_records - 分页参数、过滤条件序列化
2. get_record - 正常响应、未找到
3. save_records - 透传、返回 ids
4. delete_record - 成功与失败
"""

import json

import pytest

from ninox_client.api.record import RecordAPI
from ninox_client.core.errors import TransportError
from ninox_client.schemas import NinoxRecord

TABLE_PATH = "/teams/t1/databases/d1/tables/A"


@pytest.fixture
def api(mock_client):
    """创建 RecordAPI 实例"""
    return RecordAPI(mock_client, max_page_size=9999)


class TestListRecords:
    """测试 list_records 方法"""

    @pytest.mark.asyncio
    async def test_list_records_without_filters(self, api, mock_client, mock_response):
        """测试无过滤条件时不发送 filters 参数"""
        mock_client.get.return_value = mock_response(
            [{"id": 1, "fields": {"Name": "A"}}, {"id": 2, "fields": {"Name": "B"}}]
        )

        result = await api.list_records("t1", "d1", "A")

        assert [record.id for record in result] == [1, 2]
        path = mock_client.get.call_args[0][0]
        params = mock_client.get.call_args[1]["params"]
        assert path == f"{TABLE_PATH}/records"
        assert params == {"pages": 9999, "perPage": 9999}

    @pytest.mark.asyncio
    async def test_list_records_with_filters(self, api, mock_client, mock_response):
        """测试过滤条件序列化为 {"fields": filters}"""
        mock_client.get.return_value = mock_response([])

        await api.list_records("t1", "d1", "A", filters={"Status": "Open"})

        params = mock_client.get.call_args[1]["params"]
        assert json.loads(params["filters"]) == {"fields": {"Status": "Open"}}

    @pytest.mark.asyncio
    async def test_list_records_error(self, api, mock_client, mock_response):
        """测试错误状态抛出 TransportError"""
        mock_client.get.return_value = mock_response(
            {"message": "Table not found"}, status_code=404
        )

        with pytest.raises(TransportError):
            await api.list_records("t1", "d1", "ZZ")


class TestGetRecord:
    """测试 get_record 方法"""

    @pytest.mark.asyncio
    async def test_get_record_success(self, api, mock_client, mock_response):
        """测试正常获取记录，包含审计字段"""
        mock_client.get.return_value = mock_response(
            {
                "id": 6,
                "sequence": 97,
                "createdAt": "2022-06-28T19:35:01",
                "createdBy": "u1",
                "modifiedAt": "2022-07-02T12:34:39",
                "modifiedBy": "u2",
                "fields": {"Name": "My Deliverable"},
            }
        )

        record = await api.get_record("t1", "d1", "A", 6)

        assert record.id == 6
        assert record.created_at == "2022-06-28T19:35:01"
        assert record.modified_by == "u2"
        assert record.fields == {"Name": "My Deliverable"}
        mock_client.get.assert_awaited_once_with(f"{TABLE_PATH}/records/6")

    @pytest.mark.asyncio
    async def test_get_record_not_found(self, api, mock_client, mock_response):
        """未知 id 直接以 TransportError 抛出，保留后端响应体"""
        mock_client.get.return_value = mock_response(
            {"message": "Record not found"}, status_code=404
        )

        with pytest.raises(TransportError) as exc_info:
            await api.get_record("t1", "d1", "A", 404)

        assert exc_info.value.status == 404
        assert exc_info.value.body == {"message": "Record not found"}

    @pytest.mark.asyncio
    async def test_get_record_unexpected_payload(self, api, mock_client, mock_response):
        """2xx 但响应体不是记录对象时抛出 TransportError"""
        mock_client.get.return_value = mock_response(["not", "a", "record"])

        with pytest.raises(TransportError) as exc_info:
            await api.get_record("t1", "d1", "A", 6)

        assert exc_info.value.status == 200


class TestSaveRecords:
    """测试 save_records 方法"""

    @pytest.mark.asyncio
    async def test_save_records_passes_dicts_through(
        self, api, mock_client, mock_response
    ):
        """测试 dict 记录原样透传，返回 ids 与提交顺序一致"""
        mock_client.post.return_value = mock_response([{"id": "9"}, {"id": "5"}])
        records = [{"fields": {"x": 1}}, {"id": "5", "fields": {"x": 2}}]

        result = await api.save_records("t1", "d1", "A", records)

        assert result.success is True
        assert result.ids == ["9", "5"]
        mock_client.post.assert_awaited_once_with(
            f"{TABLE_PATH}/records", json=records
        )

    @pytest.mark.asyncio
    async def test_save_records_serializes_models(
        self, api, mock_client, mock_response
    ):
        """测试 NinoxRecord 只序列化显式设置的键"""
        mock_client.post.return_value = mock_response([{"id": 3}])

        await api.save_records("t1", "d1", "A", [NinoxRecord(fields={"x": 1})])

        payload = mock_client.post.call_args[1]["json"]
        assert payload == [{"fields": {"x": 1}}]

    @pytest.mark.asyncio
    async def test_save_records_non_200_success_status(
        self, api, mock_client, mock_response
    ):
        """只有 HTTP 200 才算成功"""
        mock_client.post.return_value = mock_response([{"id": 1}], status_code=201)

        result = await api.save_records("t1", "d1", "A", [{"fields": {}}])

        assert result.success is False
        assert result.ids == [1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"id": 1}, [1, 2]])
    async def test_save_records_unexpected_payload(
        self, api, mock_client, mock_response, body
    ):
        """返回值不是对象列表时抛出 TransportError"""
        mock_client.post.return_value = mock_response(body)

        with pytest.raises(TransportError) as exc_info:
            await api.save_records("t1", "d1", "A", [{"fields": {}}])

        assert exc_info.value.body == body


class TestDeleteRecord:
    """测试 delete_record 方法"""

    @pytest.mark.asyncio
    async def test_delete_record_success(self, api, mock_client, mock_response):
        mock_client.delete.return_value = mock_response(None)

        assert await api.delete_record("t1", "d1", "A", 1) is True
        mock_client.delete.assert_awaited_once_with(f"{TABLE_PATH}/records/1")

    @pytest.mark.asyncio
    async def test_delete_record_failure(self, api, mock_client, mock_response):
        mock_client.delete.return_value = mock_response({}, status_code=404)

        assert await api.delete_record("t1", "d1", "A", 1) is False
