"""Calendars: a multi-calendar event manager driven by a text command language.

Events live in named in-memory calendars; commands create, edit, copy,
query and export them, either one at a time or from a script.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
