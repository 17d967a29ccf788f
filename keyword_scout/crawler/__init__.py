# keyword_scout/crawler/__init__.py
"""Fetching and same-site link discovery."""
