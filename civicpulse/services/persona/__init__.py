"""Persona service layer — event loading and snapshot management."""
