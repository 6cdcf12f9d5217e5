"""I/O layer: response cache and upstream HTTP access."""
