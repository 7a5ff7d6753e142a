"""Tenant-scoped data access for items and progress."""
