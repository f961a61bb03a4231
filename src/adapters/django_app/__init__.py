"""Adapters Django (ORM, views, Unit of Work, eventos)."""
