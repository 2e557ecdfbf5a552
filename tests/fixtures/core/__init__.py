"""Core fixtures: filesystem store, snapshot persistence and trees."""
