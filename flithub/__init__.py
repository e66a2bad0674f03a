"""FLITHUB bulk import service."""
