"""Adapters - Infrastructure implementations of core interfaces.

Adapters are organized by type:
- db/: Application database (asyncpg)
- auth/: Auth repository and magic-link delivery
- notifications/: Email transports
"""
