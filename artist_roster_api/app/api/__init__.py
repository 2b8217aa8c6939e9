"""
HTTP layer: routers, request dependencies and the admin auth gate.
"""
