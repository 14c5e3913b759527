"""Output layer: Rich rendering and JSON formatting of service results."""
