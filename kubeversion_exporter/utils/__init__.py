"""Pure helpers shared by the services."""
