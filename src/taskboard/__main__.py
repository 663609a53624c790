"""Run the Taskboard API: python -m taskboard"""
from .main import run

run()
