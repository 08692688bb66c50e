"""
UI package for the RallySync rally timing planner.

This package contains the Flask web server exposing the planner API.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
