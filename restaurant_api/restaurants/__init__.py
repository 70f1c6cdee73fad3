"""
Restaurant query layer.

Responsibilities:
- Typed restaurant and review records plus the API response models.
- Filter the restaurant collection from request query parameters.
- Look up one restaurant and attach its reviews, newest first.
"""
