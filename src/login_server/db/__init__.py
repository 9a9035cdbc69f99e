"""SQLite record store for accounts, players and community data."""
