"""Networking service resource families."""
