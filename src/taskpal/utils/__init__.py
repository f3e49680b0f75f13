"""Utility helpers for Taskpal."""
