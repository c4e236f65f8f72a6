"""Front ends driving the chess engine: interactive CLI and FastAPI service."""
