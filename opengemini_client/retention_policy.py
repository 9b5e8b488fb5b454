"""Retention policy configuration and the statements that manage it."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidNameError(ValueError):
    """Raised when a database or retention policy name is missing."""


@dataclass
class RpConfig:
    """Settings for creating or altering a retention policy."""

    name: str
    duration: str = ""
    shard_group_duration: str = ""
    index_duration: str = ""


def _check_database_and_policy(database: str, retention_policy: str) -> None:
    if not database:
        raise InvalidNameError("empty database name")
    if not retention_policy:
        raise InvalidNameError("empty retention policy name")


def create_retention_policy_command(database: str, config: RpConfig, is_default: bool) -> str:
    """Return the CREATE RETENTION POLICY statement for ``config``."""
    _check_database_and_policy(database, config.name)
    parts = [
        f'CREATE RETENTION POLICY {config.name} ON "{database}" '
        f"DURATION {config.duration} REPLICATION 1"
    ]
    if config.shard_group_duration:
        parts.append(f" SHARD DURATION {config.shard_group_duration}")
    if config.index_duration:
        parts.append(f" INDEX DURATION {config.index_duration}")
    if is_default:
        parts.append(" DEFAULT")
    return "".join(parts)


def update_retention_policy_command(database: str, config: RpConfig, is_default: bool) -> str:
    """Return the ALTER RETENTION POLICY statement for ``config``."""
    _check_database_and_policy(database, config.name)
    parts = [f'ALTER RETENTION POLICY {config.name} ON "{database}" ']
    if config.duration:
        parts.append(f" DURATION {config.duration}")
    if config.index_duration:
        parts.append(f" INDEX DURATION {config.index_duration}")
    if config.shard_group_duration:
        parts.append(f" SHARD DURATION {config.shard_group_duration}")
    if is_default:
        parts.append(" DEFAULT")
    return "".join(parts)


def drop_retention_policy_command(database: str, retention_policy: str) -> str:
    """Return the DROP RETENTION POLICY statement."""
    _check_database_and_policy(database, retention_policy)
    return f'DROP RETENTION POLICY {retention_policy} ON "{database}"'