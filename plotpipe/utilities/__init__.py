"""
Modular utilities package for plotpipe.

This package contains specialized modules for different aspects of the library:
- configuration: Logging configuration
- error_handling: Exception taxonomy and handlers
- plotting: Chart specifications, scales, subplots and export
- widgets: Post-render hooks and interactive callbacks
- ui: Streamlit rendering helpers for the gallery
"""
