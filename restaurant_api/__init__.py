"""
Restaurant Review API.

Responsibilities:
- Serve restaurant and review records kept in flat JSON files.
- Filter restaurants by free-text search, category, rating and price.
- Derive aggregate statistics over the stored records.
"""
