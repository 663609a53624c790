"""
HTTP API for the Taskboard backend
"""
