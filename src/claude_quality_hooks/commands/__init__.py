"""Hook drivers and management commands behind the CLI."""
