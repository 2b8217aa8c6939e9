"""
Application package for the Artist Roster API.

Layout:

* ``core``: settings, logging, database access, security primitives
  and the domain error classes.
* ``schemas``: pydantic request/response models.
* ``services``: the artist collection, admin accounts and sessions.
* ``api``: FastAPI routers and request dependencies.
"""

from .main import app, create_app  # noqa: F401
