"""Application layer: use-case services over the boundary and core."""
