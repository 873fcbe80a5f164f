"""Adapters binding the engine to concrete editing hosts."""
