"""
services/ - Business Logic Layer
================================
Services call repositories and turn their results into the
human-readable lines the program prints.
"""
