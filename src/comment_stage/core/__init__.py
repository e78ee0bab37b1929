"""Configuration, security, and error primitives."""
