"""
UI support package for the Soccer Game Tracker.

Rendering lives in the host application; this package only provides the
display lookups shared by front ends.
"""
from .presentation import ACTION_STYLES, ActionStyle, describe_action, timeline_entry

__all__ = ["ACTION_STYLES", "ActionStyle", "describe_action", "timeline_entry"]
