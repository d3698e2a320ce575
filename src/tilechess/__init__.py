"""tilechess: legal-move highlighting rules engine for a drag-and-drop chess board."""

__version__ = "0.1.0"
