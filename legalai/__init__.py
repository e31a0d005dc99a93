"""Legal document redline review backend."""
