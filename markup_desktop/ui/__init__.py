"""Tk presentation layer: dialogs, menubar rendering and the source view."""
