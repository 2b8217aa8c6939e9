"""
Top-level package for the Artist Roster API.

All functionality lives in submodules under ``app``, e.g.
``artist_roster_api.app.main``.
"""

__all__ = []
