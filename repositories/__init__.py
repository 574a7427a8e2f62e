"""
repositories/ - Data Access Layer
==================================
UserRepository holds every SQL statement run against the `users` table
and decodes result rows into User models.
"""
