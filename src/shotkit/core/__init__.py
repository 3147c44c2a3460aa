"""Core data models shared across shotkit."""
