"""Configuration, logging and schema migrations."""
