# mapbox_distance/core/__init__.py
"""
Бизнес-логика библиотеки.
"""
