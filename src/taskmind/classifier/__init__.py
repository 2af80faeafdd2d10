"""
Intent classifier.

Components:
- decision.py: Decision variants, strict parsing, fallback default
- prompt.py: the classification prompt template
- intent.py: classify() / classify_with_fallback()
"""
