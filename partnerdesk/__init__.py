"""Desktop management of partners, their sales and material needs on an SQLite database."""

__version__ = "0.1.0"