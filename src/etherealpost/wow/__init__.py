"""World of Warcraft static game data (DB2 tables and derived lookups)."""
