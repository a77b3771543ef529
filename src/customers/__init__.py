"""Customers bounded context."""
