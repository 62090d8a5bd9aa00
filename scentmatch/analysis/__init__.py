"""
Analysis recovery layer.

Responsibilities:
- Normalise raw generative-model text into a best-effort JSON string.
- Recover a candidate record through tiered parsing strategies.
- Validate, default and freeze the candidate into an AnalysisRecord.
- Never raise to the caller, whatever the input looks like.
"""
