"""Business logic layered over the record store."""
