"""Core utilities shared by the launcher: errors, logging, process execution."""
