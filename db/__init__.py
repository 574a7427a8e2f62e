"""
db/ - Database Layer
====================
Owns the single PostgreSQL connection, its background driver, and the
error type every database failure is reported as.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
