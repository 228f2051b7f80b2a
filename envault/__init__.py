"""Envault: register local projects and switch their active .env file."""

__version__ = "0.1.0"
