"""Pipelines for ingestion and matchmaking.

Each step is callable on its own from the API, scripts, or tests.
"""
