"""Core data models, events, and configuration."""
