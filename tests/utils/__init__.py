"""Shared helpers for foxfetch tests."""
