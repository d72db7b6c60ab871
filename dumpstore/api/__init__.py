"""HTTP layer of the example posts service."""
