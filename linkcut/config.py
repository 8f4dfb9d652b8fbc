"""Service configuration read from environment variables."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    """Return the variable as a 64-bit decimal integer, or the default."""
    raw = env.get(name, "")
    if _INTEGER.fullmatch(raw) and -(2**63) <= int(raw) < 2**63:
        return int(raw)
    return default


@dataclass(frozen=True)
class AppSettings:
    retry_interval: int = 5


@dataclass(frozen=True)
class DatabaseSettings:
    user: str = ""
    password: str = ""
    port: int = 5432
    host: str = ""
    name: str = ""
    sslmode: str = ""


@dataclass(frozen=True)
class RedisSettings:
    port: int = 6379
    host: str = ""


@dataclass(frozen=True)
class HashSettings:
    charset: str = ""
    length: int = 6


@dataclass(frozen=True)
class Config:
    database: DatabaseSettings
    app: AppSettings
    redis: RedisSettings
    hash: HashSettings


def load_database_config(environ: Mapping[str, str] | None = None) -> DatabaseSettings:
    """Read the DB_* variables."""
    env = os.environ if environ is None else environ
    return DatabaseSettings(
        user=env.get("DB_USER", ""),
        password=env.get("DB_PASSWORD", ""),
        port=_env_int(env, "DB_PORT", 5432),
        host=env.get("DB_HOST", ""),
        name=env.get("DB_NAME", ""),
        sslmode=env.get("DB_SSLMODE", ""),
    )


def load_redis_config(environ: Mapping[str, str] | None = None) -> RedisSettings:
    """Read the REDIS_* variables."""
    env = os.environ if environ is None else environ
    return RedisSettings(port=_env_int(env, "REDIS_PORT", 6379), host=env.get("REDIS_HOST", ""))


def load_hash_config(environ: Mapping[str, str] | None = None) -> HashSettings:
    """Read the HASH_* variables."""
    env = os.environ if environ is None else environ
    return HashSettings(charset=env.get("HASH_CHARSET", ""), length=_env_int(env, "HASH_LENGTH", 6))


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Read the whole configuration from the environment."""
    env = os.environ if environ is None else environ
    return Config(
        database=load_database_config(env),
        app=AppSettings(retry_interval=_env_int(env, "APP_RETRY_INTERVAL", 5)),
        redis=load_redis_config(env),
        hash=load_hash_config(env),
    )