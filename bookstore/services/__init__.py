"""Store operations for users and books."""
