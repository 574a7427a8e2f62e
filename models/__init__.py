"""
models/ - Domain Models
=======================
Plain dataclasses decoded from database rows. They are snapshots and are
never kept in sync with the database after a read.
"""
