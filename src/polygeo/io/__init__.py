"""Readers and writers for polylines and point stores."""
