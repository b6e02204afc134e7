"""Backend package: DB models, scoring, matchmaking pipelines, APIs.

The compatibility scorer (``hub.scoring``) is pure; everything that touches
storage goes through ``hub.repository``.
"""
