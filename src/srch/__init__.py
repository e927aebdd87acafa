"""
srch - Core Package

A recursive search tool that finds files and folders by name, or text inside
files, below a directory.
"""

__version__ = "0.1.0"
__author__ = "srch Team"
