"""Wardrobe-based outfit recommendations."""
