import pytest

from opengemini_client.models import (
    QueryError,
    QueryResult,
    RetentionPolicy,
    Series,
    SeriesResult,
    SortOrder,
)

AUTOGEN_ROW = ["autogen", "7200h0m0s", "2h0m0s", "0s", "0s", "4h0m0s", 1.0, True]


def _result_with_values(values):
    return QueryResult.from_dict(
        {"results": [{"series": [{"name": "rps", "columns": ["name"], "values": values}]}]}
    )


def test_sort_order_values():
    assert SortOrder.ASC.value == "ASC"
    assert SortOrder.DESC.value == "DESC"
    assert SortOrder("DESC") is SortOrder.DESC


def test_series_from_dict_keeps_content():
    data = {
        "name": "weather",
        "tags": {"location": "beijing"},
        "columns": ["time", "temperature"],
        "values": [[1, 25.5], [2, 26.0]],
    }
    series = Series.from_dict(data)
    assert series.name == "weather"
    assert series.tags == {"location": "beijing"}
    assert series.columns == ["time", "temperature"]
    assert series.values == [[1, 25.5], [2, 26.0]]


def test_series_from_empty_dict():
    series = Series.from_dict({})
    assert series == Series()
    assert series.values == []


def test_query_result_from_dict_nesting():
    result = QueryResult.from_dict(
        {"results": [{"series": [{"name": "a"}, {"name": "b"}]}, {"error": "boom"}]}
    )
    assert [s.name for s in result.results[0].series] == ["a", "b"]
    assert result.results[1] == SeriesResult(series=[], error="boom")


def test_raise_for_error_top_level():
    result = QueryResult.from_dict({"error": "database not found"})
    with pytest.raises(QueryError, match="database not found"):
        result.raise_for_error()


def test_raise_for_error_inner_result():
    result = QueryResult.from_dict({"results": [{}, {"error": "measurement not found"}]})
    with pytest.raises(QueryError, match="measurement not found"):
        result.raise_for_error()


def test_raise_for_error_passes_clean_result():
    result = _result_with_values([["cpu"]])
    assert result.raise_for_error() is None
    assert result.measurements() == ["cpu"]


def test_retention_policy_from_values():
    rp = RetentionPolicy.from_values(AUTOGEN_ROW)
    assert rp.name == "autogen"
    assert rp.duration == "7200h0m0s"
    assert rp.shard_group_duration == "2h0m0s"
    assert rp.index_duration == "4h0m0s"
    assert rp.replica_num == 1
    assert rp.is_default is True


def test_retention_policy_from_values_rejects_wrong_types():
    bad_name = [1] + AUTOGEN_ROW[1:]
    with pytest.raises(TypeError, match="name must be a string"):
        RetentionPolicy.from_values(bad_name)
    bad_default = AUTOGEN_ROW[:7] + ["yes"]
    with pytest.raises(TypeError, match="isDefault must be a bool"):
        RetentionPolicy.from_values(bad_default)
    bad_replica = AUTOGEN_ROW[:6] + [True, True]
    with pytest.raises(TypeError, match="replicaNum"):
        RetentionPolicy.from_values(bad_replica)


def test_retention_policy_from_short_row():
    with pytest.raises(ValueError):
        RetentionPolicy.from_values(AUTOGEN_ROW[:5])


def test_retention_policies_skips_bad_rows_and_stops_at_short():
    bad = ["broken", 5] + AUTOGEN_ROW[2:]
    other = ["rp2"] + AUTOGEN_ROW[1:7] + [False]
    result = _result_with_values([AUTOGEN_ROW, bad, other, ["short"], AUTOGEN_ROW])
    policies = result.retention_policies()
    assert [p.name for p in policies] == ["autogen", "rp2"]
    assert policies[1].is_default is False


def test_retention_policies_empty_results():
    assert QueryResult().retention_policies() == []
    assert QueryResult.from_dict({"results": [{}]}).retention_policies() == []


def test_measurements_only_strings():
    result = _result_with_values([["cpu"], [42], [], ["mem"]])
    assert result.measurements() == ["cpu", "mem"]
    assert QueryResult().measurements() == []