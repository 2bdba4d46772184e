"""Operational scripts for the admin API."""
