"""Application layer orchestrating domain rules and infrastructure."""
