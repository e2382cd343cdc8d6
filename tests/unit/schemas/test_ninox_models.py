import pytest
from pydantic import ValidationError

from ninox_client.schemas import (
    Database,
    NinoxOptions,
    NinoxRecord,
    QueryResult,
    Team,
)


# =============================================================================
# Team / Database
# =============================================================================


class TestTeamDatabase:
    def test_numeric_id_coerced_to_str(self):
        assert Team.model_validate({"id": 12, "name": "T"}).id == "12"

    def test_missing_name(self):
        with pytest.raises(ValidationError) as exc_info:
            Database.model_validate({"id": "d1"})
        assert "name" in str(exc_info.value)


# =============================================================================
# NinoxRecord
# =============================================================================


class TestNinoxRecord:
    def test_camel_case_audit_fields(self):
        record = NinoxRecord.model_validate(
            {
                "id": 6,
                "sequence": 97,
                "createdAt": "2022-06-28T19:35:01",
                "createdBy": "u1",
                "fields": {"Name": "X"},
            }
        )

        assert record.created_at == "2022-06-28T19:35:01"
        assert record.created_by == "u1"
        assert record.modified_at is None

    def test_id_kept_as_given(self):
        """id 是不透明值，不做类型转换"""
        assert NinoxRecord.model_validate({"id": "5"}).id == "5"
        assert NinoxRecord.model_validate({"id": 5}).id == 5

    def test_extra_keys_preserved(self):
        record = NinoxRecord.model_validate({"id": 1, "fields": {}, "tableId": "A"})

        assert record.to_payload()["tableId"] == "A"

    def test_to_payload_uses_aliases_and_skips_unset(self):
        record = NinoxRecord(id=3, created_by="u1", fields={"x": 1})

        assert record.to_payload() == {
            "id": 3,
            "createdBy": "u1",
            "fields": {"x": 1},
        }

    def test_fields_default_empty(self):
        assert NinoxRecord().fields == {}


# =============================================================================
# QueryResult
# =============================================================================


@pytest.mark.parametrize(
    "raw,kind",
    [
        pytest.param(None, "null", id="null"),
        pytest.param(True, "boolean", id="boolean"),
        pytest.param(3, "number", id="int"),
        pytest.param(2.5, "number", id="float"),
        pytest.param("A6", "string", id="string"),
        pytest.param([1, 2], "list", id="list"),
        pytest.param({"a": 1}, "object", id="object"),
    ],
)
def test_query_result_kind(raw, kind):
    result = QueryResult.from_raw(raw)

    assert result.kind == kind
    assert result.value == raw


# =============================================================================
# NinoxOptions
# =============================================================================


class TestNinoxOptions:
    def test_camel_case_alias(self):
        options = NinoxOptions.model_validate(
            {"authKey": "k", "team": "T", "database": "D"}
        )
        assert options.auth_key == "k"
        assert options.uri is None

    def test_snake_case_accepted(self):
        options = NinoxOptions(auth_key="k", team="T", database="D", version="2")
        assert options.auth_key == "k"
        assert options.version == "2"
