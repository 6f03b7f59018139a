"""
Task dashboard.

Create tasks, search them, and move them through pending -> in_progress -> complete.
Persistence is delegated to an external store behind the TaskRepo port.
"""

__version__ = "0.1.0"
