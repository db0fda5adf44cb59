"""Tote consolidation planning service."""
