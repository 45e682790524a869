"""
Integration tests for the email RAG pipeline.

Test components together on realistic fixtures:
- Full pipeline (EmailRecord → cleaning → analysis → chunks → search documents)
- Batch runner (failure isolation, thread pool)
- CLI (typer CliRunner, JSON in/out)
"""
