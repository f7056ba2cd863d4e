"""Business logic used by the routes."""
