"""
Color Picker: a two-player color naming game served over HTTP.
"""
__version__ = "1.0.0"
