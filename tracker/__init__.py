"""
epic-tracker: a terminal issue tracker for epics and their stories.
"""

__version__ = "0.1.0"
