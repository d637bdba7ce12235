"""Output layer: renders ServiceResult as Rich text, quiet lines or JSON."""
