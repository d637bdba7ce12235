"""NetworkX views over graph snapshots."""
