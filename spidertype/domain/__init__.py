"""Domain layer: entities, collaborator interfaces and scoring services."""
