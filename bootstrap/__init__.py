"""Operational CLIs for seeding a link shortener deployment."""
