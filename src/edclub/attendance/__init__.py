"""Attendance resource."""
