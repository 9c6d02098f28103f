"""Textual front end for regexplore."""
