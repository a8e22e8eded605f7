"""Index persistence, population and search."""
