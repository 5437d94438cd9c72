"""
CLI interface for markstats.

Entry point: markstats.interfaces.cli.main:main
"""
