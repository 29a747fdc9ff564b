"""Shared infrastructure for the Abroadly backend (logging, monitoring, database, I/O models)."""
