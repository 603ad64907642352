"""Use cases orchestrating message dispatch."""
