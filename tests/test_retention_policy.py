import pytest

from opengemini_client.retention_policy import (
    InvalidNameError,
    RpConfig,
    create_retention_policy_command,
    drop_retention_policy_command,
    update_retention_policy_command,
)


def test_create_minimal_command():
    cmd = create_retention_policy_command("db1", RpConfig(name="rp1", duration="3d"), False)
    assert cmd == 'CREATE RETENTION POLICY rp1 ON "db1" DURATION 3d REPLICATION 1'


def test_create_with_shard_and_index_in_order():
    config = RpConfig(name="rp3", duration="3d", shard_group_duration="1h", index_duration="7h")
    cmd = create_retention_policy_command("db1", config, False)
    assert cmd.startswith('CREATE RETENTION POLICY rp3 ON "db1" DURATION 3d REPLICATION 1')
    assert cmd.index("SHARD DURATION 1h") < cmd.index("INDEX DURATION 7h")
    assert not cmd.endswith("DEFAULT")


def test_create_default_suffix():
    cmd = create_retention_policy_command("db1", RpConfig(name="rp4", duration="3d"), True)
    assert cmd.endswith(" DEFAULT")
    assert "SHARD" not in cmd
    assert "INDEX" not in cmd


def test_create_empty_database_raises():
    with pytest.raises(InvalidNameError):
        create_retention_policy_command("", RpConfig(name="rp", duration="3d"), False)


def test_create_empty_policy_name_raises():
    with pytest.raises(InvalidNameError):
        create_retention_policy_command("db", RpConfig(name="", duration="3d"), False)


def test_update_duration_only():
    cmd = update_retention_policy_command("db1", RpConfig(name="autogen", duration="300d"), True)
    assert cmd == 'ALTER RETENTION POLICY autogen ON "db1"  DURATION 300d DEFAULT'


def test_update_orders_index_before_shard():
    config = RpConfig(
        name="autogen", duration="300d", shard_group_duration="2h", index_duration="4h"
    )
    cmd = update_retention_policy_command("db1", config, False)
    assert cmd.startswith('ALTER RETENTION POLICY autogen ON "db1" ')
    assert cmd.index("DURATION 300d") < cmd.index("INDEX DURATION 4h")
    assert cmd.index("INDEX DURATION 4h") < cmd.index("SHARD DURATION 2h")
    assert not cmd.endswith("DEFAULT")


def test_update_empty_database_raises():
    with pytest.raises(InvalidNameError):
        update_retention_policy_command("", RpConfig(name="autogen"), False)


def test_drop_command():
    assert drop_retention_policy_command("db1", "rp1") == 'DROP RETENTION POLICY rp1 ON "db1"'


@pytest.mark.parametrize("database, policy", [("", "rp"), ("db", "")])
def test_drop_missing_names_raise(database, policy):
    with pytest.raises(InvalidNameError):
        drop_retention_policy_command(database, policy)