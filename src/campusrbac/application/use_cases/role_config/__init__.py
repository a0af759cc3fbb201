"""Role configuration use cases."""
