"""
Recommendation engine.

Responsibilities:
- Score every restaurant in scope and pick a "surprise me" suggestion
  from the top candidates.
- Build the dashboard suggestion feed (cuisine diversity, beloved
  restaurant, unvisited restaurant, favourite dish).
"""
