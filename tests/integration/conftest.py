"""Integration test fixtures.

Provides pipeline instances and JSON inputs for end-to-end runs.
"""

import json
import pytest
from pathlib import Path

from email_rag.pipeline import EmailContentPipeline


@pytest.fixture
def pipeline(test_settings):
    """Pipeline with small chunks so the sample email splits into several."""
    settings = test_settings.model_copy(update={"CHUNK_SIZE": 200, "CHUNK_OVERLAP": 20})
    return EmailContentPipeline(settings)


@pytest.fixture
def records_file(tmp_path: Path, sample_email_data):
    """Write a JSON array of email records and return its path.
    
    Usage:
        def test_something(records_file):
            path = records_file([{"subject": "Hi", "body": "..."}])
    """
    def _write(records=None, name: str = "emails.json") -> Path:
        path = tmp_path / name
        payload = records if records is not None else [sample_email_data]
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    
    return _write
