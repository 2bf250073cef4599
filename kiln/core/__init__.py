"""Core domain models and errors."""
