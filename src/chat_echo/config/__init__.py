"""Configuration constants and runtime settings for chat-echo."""
