"""
Visit journal data layer.

Responsibilities:
- Define the Restaurant / Visit / DishReview records and request bodies.
- Resolve the personal-vs-group scope a request operates in.
- Keep the in-process record store and its scoped queries.
"""
