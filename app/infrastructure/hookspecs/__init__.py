"""Pluggy hook specifications."""
