"""Responder layer: rule matching and the AutoResponder that acts on a match."""
