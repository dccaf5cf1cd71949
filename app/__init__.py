"""Circuit generator: schematic connectivity model, controllers and CLI."""
