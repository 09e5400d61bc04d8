"""Food extraction domain: entities, ports and services."""
