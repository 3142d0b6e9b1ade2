"""Unified search client for the company intranet portal."""
