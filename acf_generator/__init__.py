"""
ACF Generator

Generates ACF field group JSON from prompts via an AI chat-completion API
and renders PHP template snippets from existing field group schemas.
"""

__version__ = "0.1.0"
