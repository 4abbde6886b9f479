"""Feed providers."""
