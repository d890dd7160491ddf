"""Per-mode tick handlers."""
