"""Repositories for database access."""
