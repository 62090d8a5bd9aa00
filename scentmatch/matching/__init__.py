"""
Catalog matching engine.

Responsibilities:
- Score catalog items against an AnalysisRecord with weighted cosine similarity.
- Rank candidates deterministically and keep the top N.
- Generate a natural-language justification for every ranked item.
- Suggest season, time of day and occasion for each pick and build display summaries.
- Load the sample catalog shipped with the package.
"""
