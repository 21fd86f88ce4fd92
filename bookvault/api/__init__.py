"""HTTP API for BookVault: request validation and resource blueprints."""
