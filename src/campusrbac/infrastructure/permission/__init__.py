"""Authorization adapters backed by the unit of work."""
