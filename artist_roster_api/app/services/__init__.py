"""
Service layer.

Each service wraps the SQL for one concern and receives its database
connection from the caller, so routes and tests decide which database
is used.
"""
