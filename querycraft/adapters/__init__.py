"""Adapters that execute built statements on database connections."""

from querycraft.adapters.dbapi import DBAPIAdapter

__all__ = ("DBAPIAdapter",)
