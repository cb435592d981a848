"""content

Prompt, parsing and fallback content for the city/hint generation layer.
"""
