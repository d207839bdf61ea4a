"""Static catalogs for the setup wizard (agents, commands, packages, paths)."""
