"""Principal administration use cases."""
