"""
Web interface module for Color Picker.

Provides FastAPI-based web server for:
- The game and wait pages played in the browser
- A JSON API over the same game protocol
"""
