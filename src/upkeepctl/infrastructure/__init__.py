"""Infrastructure layer: vault discovery and note file I/O."""
