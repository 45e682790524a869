"""
Unit tests for the email RAG pipeline.

Test individual components in isolation:
- Cleaning stages (HTML sanitizer, signature stripper, normalizer, fail-open base)
- Analysis stages (entity extractor, quality scorer)
- Chunker (boundaries, overlap, configuration errors)
- Search documents (keywords, field guard, builder, export)
- Data models (aliases, importance mapping, immutability)
"""
