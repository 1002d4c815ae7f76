"""Core layer: configuration, enums, errors, results, composition root."""
