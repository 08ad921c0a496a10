"""Utility helpers for the tower simulation."""
