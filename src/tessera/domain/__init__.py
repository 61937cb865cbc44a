"""Domain layer: user aggregate, persistence port, rules and error taxonomy."""
