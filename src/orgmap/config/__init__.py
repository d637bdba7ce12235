"""Configuration: section models, orgmap.toml discovery and CLI settings."""
