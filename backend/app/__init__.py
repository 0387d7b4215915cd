"""Todo backend application package."""
