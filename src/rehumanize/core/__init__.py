"""Protocols shared across rehumanize components."""
