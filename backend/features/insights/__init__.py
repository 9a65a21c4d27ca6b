"""
Todo Recommendation Engine

Derives lightweight usage analytics from the current todo snapshot:
- Aggregate stats (total, completed, pending, completion rate)
- Frequent keywords across titles
- Insights and suggestions from a fixed, ordered rule table

All logic is deterministic given the snapshot and the evaluation time.
"""
