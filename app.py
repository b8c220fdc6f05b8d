#!/usr/bin/env python3
"""
Gaan Khoj app
Main entry point for the deployed application
"""

from gaan_khoj.app.app import main

if __name__ == "__main__":
    main()
