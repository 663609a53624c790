"""
Utilities for the Taskboard backend
Error taxonomy, logging helpers and password primitives
"""
