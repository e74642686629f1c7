#!/usr/bin/env python3
"""
Alias Records Manager - Main Entry Point

This is the main entry point for the Alias Records Manager.
It can be run directly or imported as a module.
"""

from alias_records_manager.cli.main import main

if __name__ == "__main__":
    main()
