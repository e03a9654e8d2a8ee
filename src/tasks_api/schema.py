from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id SERIAL PRIMARY KEY,
    title VARCHAR(255) NOT NULL,
    description TEXT,
    completed BOOLEAN DEFAULT FALSE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


# PUBLIC_INTERFACE
async def ensure_schema(database: Database) -> None:
    """
    Create the tasks table if it does not exist yet.

    Safe to run on every startup. Errors propagate as ``StoreError``; the
    caller decides whether they are fatal.
    """
    await database.execute(CREATE_TASKS_TABLE)
    logger.info("Database initialized successfully")
