"""Database definitions: declarative Base and the seed dataset."""
