"""Auth adapters: Postgres repository and magic-link delivery."""

from .magic_link_console import ConsoleMagicLinkSender
from .postgres import PostgresAuthRepository

__all__ = ["ConsoleMagicLinkSender", "PostgresAuthRepository"]
