"""Built-in plugins shipped with pomoctl."""
