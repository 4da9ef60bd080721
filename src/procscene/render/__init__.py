"""
Optional raylib renderer for procscene scenes.
"""
