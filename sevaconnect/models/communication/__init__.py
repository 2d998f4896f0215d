"""Booking chat models."""
