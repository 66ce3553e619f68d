"""Deptrace - offline package dependency graph inspection."""

__version__ = "0.1.0"
