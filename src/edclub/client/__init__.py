"""Async data-access client for the EDClub API."""
