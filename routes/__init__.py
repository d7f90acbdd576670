"""HTTP blueprints for the shop API."""
