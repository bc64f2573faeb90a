"""Creates the quota schema and tables."""

import logging

from ....database import DatabaseManager, translate_errors
from ..utils.queries import QUOTA_SCHEMA_DDL

logger = logging.getLogger(__name__)


class QuotaSchemaManager:
    """Applies ``QUOTA_SCHEMA_DDL`` to the configured schema. Idempotent."""

    def __init__(self, database: DatabaseManager, schema: str = "quotas"):
        self._db = database
        self._schema = schema

    async def create_schema(self) -> None:
        """Create the schema and quota tables if they do not exist."""
        async with translate_errors("create quota schema"):
            await self._db.execute(QUOTA_SCHEMA_DDL.format(schema=self._schema))
        logger.info(f"Quota schema '{self._schema}' is ready")
