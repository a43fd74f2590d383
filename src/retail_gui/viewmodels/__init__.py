"""Headless view models backing the Qt views."""
