"""Garage catalog backend: build records and their images."""
