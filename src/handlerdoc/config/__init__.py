"""Configuration layer — TOML models, settings resolution, and logging setup."""
