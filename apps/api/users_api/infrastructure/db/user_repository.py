from typing import List, Optional

from users_api.core.domain.user import User
from users_api.infrastructure.db.gateway import StorageGateway
from users_api.interfaces.api.schemas import UserFields


TABLE_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    firstname VARCHAR(255) NOT NULL,
    lastname VARCHAR(255) NOT NULL,
    email VARCHAR(255) NOT NULL,
    city VARCHAR(255) NOT NULL,
    language VARCHAR(255) NOT NULL
);
"""

USER_COLUMNS = ("id", "firstname", "lastname", "email", "city", "language")

SELECT_USERS = "SELECT id, firstname, lastname, email, city, language FROM users"

SELECT_USER_BY_ID = SELECT_USERS + " WHERE id = %s"

INSERT_USER = """
INSERT INTO users (firstname, lastname, email, city, language)
VALUES (%s, %s, %s, %s, %s)
RETURNING id
"""

UPDATE_USER = """
UPDATE users
SET firstname = %s, lastname = %s, email = %s, city = %s, language = %s
WHERE id = %s
"""


def ensure_table(gateway: StorageGateway) -> None:
    gateway.query(TABLE_DDL)


def _row_to_user(row) -> User:
    if hasattr(row, "get"):
        getter = row.get
    else:
        values = dict(zip(USER_COLUMNS, row))
        getter = values.get
    return User(
        id=int(getter("id")),
        firstname=getter("firstname"),
        lastname=getter("lastname"),
        email=getter("email"),
        city=getter("city"),
        language=getter("language"),
    )


class UserRepository:
    """Users table access; one statement per call, errors propagate."""

    def __init__(self, gateway: StorageGateway):
        self.gateway = gateway

    def list_users(self) -> List[User]:
        result = self.gateway.query(SELECT_USERS)
        return [_row_to_user(row) for row in result.rows]

    def get_user(self, user_id: int) -> Optional[User]:
        result = self.gateway.query(SELECT_USER_BY_ID, [user_id])
        return _row_to_user(result.rows[0]) if result.rows else None

    def create_user(self, fields: UserFields) -> int:
        result = self.gateway.query(INSERT_USER, fields.as_params())
        return int(result.insert_id)

    def update_user(self, user_id: int, fields: UserFields) -> int:
        result = self.gateway.query(UPDATE_USER, [*fields.as_params(), user_id])
        return result.affected_rows
