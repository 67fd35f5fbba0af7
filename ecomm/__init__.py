"""Ecomm catalog query service."""
