"""Relational persistence: declarative base, engine/session factory, ORM models, CRUD."""
