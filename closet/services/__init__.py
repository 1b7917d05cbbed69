"""Application services wiring the recommender to its collaborators."""
