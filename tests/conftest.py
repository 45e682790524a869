"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import pytest
from datetime import datetime
from pathlib import Path
from typing import Dict, Any

from email_rag.config import Settings
from email_rag.models.input_models import Contact, EmailRecord, Recipients


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with explicit defaults (independent of any local .env).
    
    Override specific settings in individual tests with model_copy:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"CHUNK_SIZE": 100})
    """
    return Settings(
        _env_file=None,
        # === Application ===
        APP_NAME="Email RAG Pipeline (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        
        # === Chunking ===
        CHUNK_SIZE=512,
        CHUNK_OVERLAP=50,
        BOUNDARY_SEARCH_WINDOW=50,
        
        # === Toggles ===
        REMOVE_SIGNATURES=True,
        EXTRACT_ENTITIES=True,
        OPTIMIZE_FOR_RAG=True,
        
        # === Quality ===
        QUALITY_THRESHOLD=0.0,
        SKIP_LOW_QUALITY=False,
        
        # === Batch ===
        BATCH_MAX_WORKERS=1,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_email_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load sample email fixture as dict (camelCase keys, as exported by the MSG reader)."""
    with open(fixtures_dir / "sample_email.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_email(sample_email_data: Dict[str, Any]) -> EmailRecord:
    """Parsed EmailRecord instance from sample fixture."""
    return EmailRecord.model_validate(sample_email_data)


@pytest.fixture
def create_test_email():
    """Factory fixture to create EmailRecord with custom content.
    
    Usage:
        def test_something(create_test_email):
            email = create_test_email(body="Custom email text")
    """
    def _create(
        body: str = "Test email body",
        subject: str = "Test Subject",
        html_body: str = "",
        file_name: str = "test_message.msg",
        sender_name: str = "Alice Example",
        sender_email: str = "alice@example.com",
    ) -> EmailRecord:
        return EmailRecord(
            subject=subject,
            body=body,
            html_body=html_body,
            sender=Contact(name=sender_name, email=sender_email),
            recipients=Recipients(
                to=[Contact(name="Bob Example", email="bob@example.com")],
                cc=[Contact(name="", email="team@example.com")],
            ),
            sent_at=datetime(2024, 3, 14, 9, 30),
            received_at=datetime(2024, 3, 14, 9, 31),
            size=len(body) + len(html_body),
            importance="normal",
            attachments=[],
            file_name=file_name,
        )
    
    return _create


@pytest.fixture
def long_body() -> str:
    """Multi-paragraph plain-text body long enough to produce several chunks."""
    paragraphs = [
        "The quarterly infrastructure review is scheduled for next Thursday. "
        "Please bring the updated capacity projections and the migration timeline.",
        "We observed elevated latency on the storage cluster during the last "
        "maintenance window. The operations team traced it to a misconfigured "
        "replication schedule, which has since been corrected.",
        "Budget approval for the new monitoring platform is still pending. "
        "Finance asked for a comparison of licensing costs across three vendors "
        "before the end of the month.",
        "Finally, remember that the security training deadline is approaching. "
        "Everyone on the infrastructure team must complete the course.",
    ]
    return "\n\n".join(paragraphs)
