"""Domain layer: plain dataclasses without persistence concerns."""
