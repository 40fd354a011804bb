"""Core building blocks shared across the application."""
