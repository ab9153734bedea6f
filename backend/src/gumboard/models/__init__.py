"""SQLAlchemy models for the application database."""

from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex, CreateTable

from gumboard.models.base import BaseModel
from gumboard.models.board import Board
from gumboard.models.note import ChecklistItem, Note
from gumboard.models.organization import Organization
from gumboard.models.session import Session
from gumboard.models.user import User
from gumboard.models.verification_token import VerificationToken


def schema_statements() -> list[str]:
    """Compile the models to idempotent PostgreSQL DDL, in dependency order."""
    dialect = postgresql.dialect()
    statements: list[str] = []
    for table in BaseModel.metadata.sorted_tables:
        statements.append(str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)))
        for index in sorted(table.indexes, key=lambda ix: ix.name or ""):
            statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)))
    return statements


__all__ = [
    "BaseModel",
    "Organization",
    "User",
    "VerificationToken",
    "Session",
    "Board",
    "Note",
    "ChecklistItem",
    "schema_statements",
]
