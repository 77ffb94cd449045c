import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from psycopg_pool import ConnectionPool

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    insert_id: Optional[int] = None
    affected_rows: int = 0


class StorageGateway:
    """
    Thin access point to the users datastore.

    Every call borrows one pooled connection, runs a single parameterized
    statement and commits. Driver errors are not caught here.
    """

    def __init__(self, pool: ConnectionPool):
        self.pool = pool

    def query(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        with self.pool.connection() as conn, conn.cursor() as cur:
            cur.execute(sql, tuple(params))
            rows = cur.fetchall() if cur.description is not None else []
            affected = cur.rowcount
            conn.commit()

        insert_id = None
        if rows:
            first = rows[0]
            # Dict rows (default) carry "id"; sequence rows put it first.
            insert_id = first.get("id") if hasattr(first, "get") else first[0]
        logger.debug("query executed: %s (%s rows)", " ".join(sql.split()), affected)
        return QueryResult(
            rows=list(rows),
            insert_id=insert_id,
            affected_rows=max(affected, 0),
        )
