"""Unit tests for input and derived data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from email_rag.models.enums import Importance
from email_rag.models.input_models import Contact, EmailRecord, Recipients
from email_rag.models.output_models import CleanedContent, EntityBundle, UrlEntity


class TestEmailRecord:
    """Test EmailRecord parsing from MSG reader output."""
    
    def test_from_fixture(self, sample_email):
        assert sample_email.subject == "Project Atlas: migration plan for Q3"
        assert sample_email.sender.email == "dana.whitfield@example.com"
        assert sample_email.recipients.count == 3
        assert sample_email.sent_at == datetime(2024, 6, 28, 14, 5)
        assert sample_email.importance is Importance.HIGH
        assert sample_email.attachments[0].file_name == "atlas-migration-plan.xlsx"
        assert sample_email.file_name == "Project Atlas migration plan.msg"
    
    def test_snake_case_accepted(self):
        email = EmailRecord(html_body="<p>x</p>", file_name="a.msg")
        assert email.html_body == "<p>x</p>"
        assert email.body == ""
    
    @pytest.mark.parametrize(
        "raw,expected",
        [(0, Importance.LOW), (1, Importance.NORMAL), (2, Importance.HIGH), (7, Importance.NORMAL), ("High", Importance.HIGH)],
    )
    def test_importance(self, raw, expected):
        assert EmailRecord(importance=raw).importance is expected
    
    def test_none_strings_become_empty(self):
        email = EmailRecord.model_validate({"subject": None, "body": None, "htmlBody": None})
        assert (email.subject, email.body, email.html_body) == ("", "", "")
    
    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            EmailRecord(size=-1)
    
    def test_frozen(self):
        email = EmailRecord(subject="x")
        with pytest.raises(ValidationError):
            email.subject = "y"


class TestContact:
    
    @pytest.mark.parametrize(
        "name,email,display",
        [
            ("Bob", "bob@example.com", "Bob <bob@example.com>"),
            ("", "bob@example.com", "bob@example.com"),
            ("Bob", "", "Bob"),
            ("bob@example.com", "bob@example.com", "bob@example.com"),
        ],
    )
    def test_display(self, name, email, display):
        assert Contact(name=name, email=email).display == display
    
    def test_recipient_count(self):
        recipients = Recipients(to=[Contact(email="a@x.io")], bcc=[Contact(email="b@x.io")])
        assert recipients.count == 2


class TestDerivedModels:
    
    def test_reduction_ratio(self):
        assert CleanedContent.compute_reduction_ratio("x" * 200, "x" * 50) == 75.0
        assert CleanedContent.compute_reduction_ratio("abc", "ab") == 33.33
        assert CleanedContent.compute_reduction_ratio("", "") == 0.0
    
    def test_entity_count_serialized(self):
        bundle = EntityBundle(
            emails=["a@x.io"],
            urls=[UrlEntity(url="https://x.io", domain="x.io", is_secure=True)],
        )
        
        assert bundle.entity_count == 2
        assert bundle.model_dump()["entity_count"] == 2
