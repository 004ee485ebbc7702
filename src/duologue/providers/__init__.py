"""AI providers used by agent sessions."""
