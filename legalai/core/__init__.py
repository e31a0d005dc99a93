"""Domain core: exception hierarchy and the redline review pipeline."""
