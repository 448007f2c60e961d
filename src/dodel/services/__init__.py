"""Service layer for the Dodel feed."""
