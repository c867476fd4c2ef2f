"""selectkit - a selection-widget controller for Autocomplete and Select dropdowns."""

__version__ = "0.1.0"
