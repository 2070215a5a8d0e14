"""Entry point, composition root and slash commands."""
