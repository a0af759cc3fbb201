"""PostgreSQL persistence adapters."""

from campusrbac.infrastructure.persistence.postgres.connection import create_pool
from campusrbac.infrastructure.persistence.postgres.unit_of_work import (
    PostgresUnitOfWork,
    create_uow_factory,
)

__all__ = ["PostgresUnitOfWork", "create_pool", "create_uow_factory"]
