"""core

Pure game domain (UI/LLM independent).
"""

API_VERSION = "core-v1-city-guesser"
