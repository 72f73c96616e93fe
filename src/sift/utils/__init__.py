"""Utility helpers for sift."""
