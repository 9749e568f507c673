"""Shared errors, outcome codes and logging for the step library."""
