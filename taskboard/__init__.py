"""Desktop team task board over SQLite."""
