"""
CLI Package

Command-line entry point for the traverse tool.
"""
