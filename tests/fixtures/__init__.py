"""
Test fixtures for the email RAG pipeline.

Contains sample data for testing:
- sample_email.json: EmailRecord as exported by the MSG reader (camelCase keys)
- newsletter.html: HTML body with tracking pixel, script and utm_* links
"""
