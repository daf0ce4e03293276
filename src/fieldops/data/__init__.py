"""Storage backends for stops and technicians."""
