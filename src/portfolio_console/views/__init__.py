"""
Views subpackage: tab selection, hero slideshow, slide derivation and scheduling.
"""
