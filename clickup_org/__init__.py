"""ClickUp ↔ Org-mode task synchronisation."""

__version__ = "0.3.0"
