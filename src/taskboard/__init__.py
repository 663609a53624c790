"""
Taskboard backend
Personal task manager: authenticated users own and manage their own tasks
"""

__version__ = "0.1.0"
