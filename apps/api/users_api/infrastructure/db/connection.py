import os
from typing import Optional

from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool


DATABASE_URL = os.environ.get("DATABASE_URL")
POOL_MIN_SIZE = int(os.environ.get("DB_POOL_MIN_SIZE", "1"))
POOL_MAX_SIZE = int(os.environ.get("DB_POOL_MAX_SIZE", "5"))
POOL_TIMEOUT = float(os.environ.get("DB_POOL_TIMEOUT", "10"))
POOL_MAX_IDLE = float(os.environ.get("DB_POOL_MAX_IDLE", "300"))

pool: Optional[ConnectionPool] = None


def init_pool() -> None:
    global pool
    if pool is not None:
        return
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set")

    pool = ConnectionPool(
        conninfo=DATABASE_URL,
        min_size=POOL_MIN_SIZE,
        max_size=POOL_MAX_SIZE,
        max_idle=POOL_MAX_IDLE,
        timeout=POOL_TIMEOUT,
        # Dict rows keep the row mapping keyed by column name.
        kwargs={"row_factory": dict_row},
        open=True,
    )


def close_pool() -> None:
    global pool
    if pool is not None:
        pool.close()
        pool = None


def get_pool() -> ConnectionPool:
    if pool is None:
        raise RuntimeError("Database pool is not initialized")
    return pool
