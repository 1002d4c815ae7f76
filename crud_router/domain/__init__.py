"""Domain layer: data-access contract and value objects."""
