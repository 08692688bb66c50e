#!/usr/bin/env python3
"""
Main entry point for the RallySync rally timing planner web application.

This script launches the Flask-based web server. The setup snapshot file can
be moved with the RALLYSYNC_SETUP_FILE environment variable.
"""
import os

from rallysync.ui.web_app import run_web_app
from rallysync.utils import DEFAULT_SETUP_FILE

if __name__ == "__main__":
    # Run web app serving files from the project root
    project_root = os.path.dirname(os.path.abspath(__file__))
    run_web_app(
        static_folder=project_root,
        setup_path=os.environ.get("RALLYSYNC_SETUP_FILE", DEFAULT_SETUP_FILE),
    )
