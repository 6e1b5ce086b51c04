"""Delivery route ordering engine and API."""
