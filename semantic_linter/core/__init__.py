"""Settings, lint configuration and logging."""
