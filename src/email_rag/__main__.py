"""Allow `python -m email_rag`."""

from .cli import app

app(prog_name="email-rag")
