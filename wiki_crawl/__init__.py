# wiki_crawl/__init__.py
"""
wiki_crawl package initializer.
Breadth-first wiki crawler feeding a full-text index.
"""
__version__ = "0.1.0"
