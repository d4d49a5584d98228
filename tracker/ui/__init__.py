"""
Terminal UI for the tracker: pages, prompters and rendering.
"""

from tracker.ui.pages import EpicDetailPage, HomePage, Page, PageKind, StoryDetailPage
from tracker.ui.prompts import CannedPrompter, ConsolePrompter, Prompter
from tracker.ui.render import Section, View, draw, get_column_string

__all__ = [
    "Page",
    "PageKind",
    "HomePage",
    "EpicDetailPage",
    "StoryDetailPage",
    "Prompter",
    "ConsolePrompter",
    "CannedPrompter",
    "Section",
    "View",
    "draw",
    "get_column_string",
]
