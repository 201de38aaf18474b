"""AI & Culture Diagnostic service.

Scores survey answers on two dimensions (AI maturity and culture alignment),
classifies each into a maturity level, resolves the recommendation bundle for
the level pair, and renders the diagnostic report either inline or through
an in-process background job queue with progress callbacks.
"""

__version__ = "0.1.0"
