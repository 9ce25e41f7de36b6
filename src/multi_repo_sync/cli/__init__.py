"""Command-line interface for multi-repo-sync."""
