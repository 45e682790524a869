"""
Integration tests for the command-line interface.

Invokes the typer app in-process with CliRunner on JSON fixtures.
"""

import json

import pytest
from typer.testing import CliRunner

from email_rag.cli import app

pytestmark = pytest.mark.integration

runner = CliRunner()


class TestProcessCommand:
    """Test `email-rag process`."""
    
    def test_writes_documents_file(self, records_file, tmp_path):
        output = tmp_path / "docs.json"
        
        result = runner.invoke(app, ["process", str(records_file()), "-o", str(output)])
        
        assert result.exit_code == 0, result.output
        documents = json.loads(output.read_text(encoding="utf-8"))
        assert documents[0]["id"] == "email-Project-Atlas-migration-plan-for-Q3"
        assert documents[0]["documentType"] == "Email"
        assert all(d["documentType"] == "EmailChunk" for d in documents[1:])
        assert "Processed 1 email(s): 1 succeeded, 0 failed" in result.output
    
    def test_prints_documents_without_output_option(self, records_file):
        result = runner.invoke(app, ["process", str(records_file())])
        
        assert result.exit_code == 0, result.output
        assert '"documentType": "Email"' in result.output
    
    def test_single_object_input(self, records_file, sample_email_data, tmp_path):
        output = tmp_path / "docs.json"
        
        result = runner.invoke(
            app, ["process", str(records_file(sample_email_data)), "-o", str(output)]
        )
        
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text(encoding="utf-8"))[0]["importance"] == "high"
    
    def test_failed_email_sets_exit_code(self, records_file, sample_email_data, tmp_path):
        output = tmp_path / "docs.json"
        path = records_file([sample_email_data, {"fileName": "blank.msg"}])
        
        result = runner.invoke(app, ["process", str(path), "-o", str(output)])
        
        assert result.exit_code == 1
        assert "blank.msg" in result.output
        assert "MissingContentError" in result.output
        documents = json.loads(output.read_text(encoding="utf-8"))
        assert documents[0]["id"] == "email-Project-Atlas-migration-plan-for-Q3"
    
    def test_invalid_record_reported(self, records_file):
        result = runner.invoke(app, ["process", str(records_file([{"size": -5}]))])
        
        assert result.exit_code == 1
        assert "Record 0 is not a valid email record" in result.output
    
    def test_invalid_chunk_config(self, records_file):
        result = runner.invoke(
            app, ["process", str(records_file()), "--chunk-size", "10", "--overlap", "10"]
        )
        
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output
    
    def test_keep_signatures(self, records_file, tmp_path):
        output = tmp_path / "docs.json"
        
        result = runner.invoke(
            app, ["process", str(records_file()), "-o", str(output), "--keep-signatures"]
        )
        
        assert result.exit_code == 0, result.output
        documents = json.loads(output.read_text(encoding="utf-8"))
        assert "Sent from my iPhone" in documents[0]["allText"]


class TestCleanCommand:
    """Test `email-rag clean`."""
    
    def test_html_file(self, tmp_path):
        path = tmp_path / "body.html"
        path.write_text('<p>Hi <b>Bob</b></p><br><img width="1" height="1" src="x">', encoding="utf-8")
        
        result = runner.invoke(app, ["clean", str(path)])
        
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Hi Bob"
    
    def test_rag_flattening(self, tmp_path):
        path = tmp_path / "body.txt"
        path.write_text("Hello\n\nworld\n\nBest regards,\nJohn", encoding="utf-8")
        
        result = runner.invoke(app, ["clean", str(path), "--rag"])
        
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Hello world."
    
    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["clean", str(tmp_path / "nope.txt")])
        assert result.exit_code != 0
