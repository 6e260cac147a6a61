"""Configuration layer — TOML discovery, unified settings, and logging."""
