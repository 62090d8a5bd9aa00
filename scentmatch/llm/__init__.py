"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the analysis prompt from a subject's context hints.
- Call Groq LLM for a raw analysis response.
- Hand the raw text to the recovery parser so callers always get a record.
"""
