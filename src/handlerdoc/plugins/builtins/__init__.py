"""Built-in plugins registered by default."""
