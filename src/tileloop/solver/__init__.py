"""Constraint propagation, search and hints for tileloop levels."""
