"""Application layer: use-case orchestration over the user domain."""
