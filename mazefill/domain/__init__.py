"""Grid model and search algorithms."""
