"""Nosh Navigator ordering service."""
