"""User API service.

HTTP and command line access to a single `users` resource backed by a
relational database, with one-way hashed passwords.
"""

__version__ = "0.1.0"
