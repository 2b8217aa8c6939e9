"""
Endpoint modules.

Each module defines an ``APIRouter``; ``api/router.py`` collects them.
"""
