"""Turn-based simulation: movement, combat, AI, inventory and the turn loop."""
