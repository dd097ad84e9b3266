"""
Assistant (remote text completion) layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Forward an ordered role/content conversation to the Groq chat API.
- Degrade to a fixed apology when the API is unavailable or fails.
"""
