"""Unit tests for HTML sanitizing and HTML-to-text conversion."""

import pytest

from email_rag.cleaning import html_sanitizer
from email_rag.cleaning.html_sanitizer import HtmlSanitizer


class TestSanitize:
    """Test removal of active content and trackers."""
    
    def setup_method(self):
        self.sanitizer = HtmlSanitizer()
    
    def test_removes_script_element_with_content(self):
        """Script elements go together with their body."""
        html = '<p>Hello</p><script type="text/javascript">alert("x")</script>'
        assert self.sanitizer.sanitize(html) == "<p>Hello</p>"
    
    @pytest.mark.parametrize("tag", ["style", "object", "embed", "applet"])
    def test_removes_embedded_elements(self, tag):
        """Every blocked element type is removed."""
        html = f"<div>Keep</div><{tag} data-x='1'>inner</{tag}>"
        assert self.sanitizer.sanitize(html) == "<div>Keep</div>"
    
    def test_removes_form_with_nested_tags(self):
        """Non-greedy element match tolerates nested non-matching tags."""
        html = '<div><form action="/x"><input name="a"><button>Go</button></form>Keep</div>'
        assert self.sanitizer.sanitize(html) == "<div>Keep</div>"
    
    def test_removes_comments_first(self):
        """Commented-out markup is dropped before element rules run."""
        html = "<p>a</p><!-- <script> --><p>b</p>"
        assert self.sanitizer.sanitize(html) == "<p>a</p><p>b</p>"
    
    def test_removes_tracking_pixel(self):
        """1x1 image is removed."""
        html = '<p>Hi</p><img width="1" height="1" src="https://t.example.com/o.gif">'
        assert self.sanitizer.sanitize(html) == "<p>Hi</p>"
    
    def test_removes_tracking_pixel_any_attribute_order(self):
        """Height before width, px units and unquoted values are all pixels."""
        html = "<img src=\"p.gif\" height='1px' width=1 />"
        assert self.sanitizer.sanitize(html) == ""
    
    def test_keeps_regular_images(self):
        """A 100px wide image is not a tracking pixel."""
        html = '<img src="logo.png" width="100" height="1">'
        assert self.sanitizer.sanitize(html) == html
    
    def test_removes_event_handlers(self):
        """on* attributes are stripped, other attributes kept."""
        html = '<a href="https://example.com" onclick="track()">Link</a>'
        assert self.sanitizer.sanitize(html) == '<a href="https://example.com">Link</a>'
    
    def test_removes_unquoted_uppercase_event_handler(self):
        html = "<body ONLOAD=init()>Text</body>"
        assert self.sanitizer.sanitize(html) == "<body>Text</body>"
    
    def test_removes_utm_parameters(self):
        """utm_* params are dropped, other query params kept."""
        html = '<a href="https://example.com/page?utm_source=news&utm_medium=email&id=7">x</a>'
        expected = '<a href="https://example.com/page?id=7">x</a>'
        assert self.sanitizer.sanitize(html) == expected
    
    def test_removes_utm_parameters_with_escaped_separators(self):
        """&amp; separators in an href keep the remaining params intact."""
        html = '<a href="https://x.com/p?utm_source=n&amp;id=7">x</a>'
        assert self.sanitizer.sanitize(html) == '<a href="https://x.com/p?id=7">x</a>'

    def test_trailing_utm_parameter_after_escaped_separator(self):
        html = '<a href="https://x.com/p?id=7&amp;utm_medium=email&amp;utm_source=n">x</a>'
        assert self.sanitizer.sanitize(html) == '<a href="https://x.com/p?id=7">x</a>'

    def test_removes_dangling_query_separator(self):
        """A URL left with only '?' loses it."""
        html = "Visit https://example.com/?utm_campaign=spring today"
        assert self.sanitizer.sanitize(html) == "Visit https://example.com/ today"
    
    def test_urls_without_utm_unchanged(self):
        html = '<a href="https://example.com/a?b=1&c=2">x</a>'
        assert self.sanitizer.sanitize(html) == html
    
    def test_empty_and_none(self):
        """Empty input and None both sanitize to empty text."""
        assert self.sanitizer.sanitize("") == ""
        assert self.sanitizer.sanitize(None) == ""
    
    def test_reports_rules_applied(self):
        """StageResult details list the rules that changed the input."""
        result = self.sanitizer.run("<!-- c --><p onclick='x()'>Hi</p>")
        
        assert not result.degraded
        assert result.details["rules_applied"] == ["comments", "event_handlers"]


class TestToPlainText:
    """Test HTML to plain text conversion."""
    
    def setup_method(self):
        self.sanitizer = HtmlSanitizer()
    
    def test_paragraph_with_tracking_pixel(self):
        """Tags stripped, pixel removed, paragraph breaks collapsed."""
        html = '<p>Hi <b>Bob</b></p><br><img width="1" height="1" src="x">'
        assert self.sanitizer.to_plain_text(html) == "Hi Bob"
    
    def test_blocks_become_paragraphs(self):
        html = "<h1>Title</h1><p>Body text</p><div>Footer</div>"
        assert self.sanitizer.to_plain_text(html) == "Title\n\nBody text\n\nFooter"
    
    def test_line_break_is_single_newline(self):
        assert self.sanitizer.to_plain_text("Line one<br/>Line two") == "Line one\nLine two"
    
    def test_list_items_get_bullets(self):
        html = "<ul><li>One</li><li>Two</li></ul>"
        assert self.sanitizer.to_plain_text(html) == "• One\n• Two"
    
    def test_decodes_entities(self):
        """The six common entities are decoded."""
        html = "<p>Fish &amp; chips &lt;3 &quot;fresh&quot; &#39;daily&#39;&nbsp;today</p>"
        assert self.sanitizer.to_plain_text(html) == "Fish & chips <3 \"fresh\" 'daily' today"
    
    def test_decodes_ampersand_last(self):
        """Double-encoded entities decode exactly once."""
        assert self.sanitizer.to_plain_text("a &amp;lt; b") == "a &lt; b"
    
    def test_collapses_horizontal_whitespace(self):
        assert self.sanitizer.to_plain_text("<p>Hello     \t world</p>") == "Hello world"
    
    def test_newsletter_fixture(self, fixtures_dir):
        """Realistic newsletter: readable text, no scripts, styles or trackers."""
        html = (fixtures_dir / "newsletter.html").read_text(encoding="utf-8")
        
        text = self.sanitizer.to_plain_text(html)
        
        assert text.startswith("Monthly Platform Update")
        assert "search relevance & indexing speed" in text
        assert "• Faster chunking" in text
        assert "• Better signature removal" in text
        assert "Read more at our blog." in text
        assert "Tracker" not in text
        assert "font-family" not in text
        assert "header banner" not in text

    def test_newsletter_fixture_links(self, fixtures_dir):
        html = (fixtures_dir / "newsletter.html").read_text(encoding="utf-8")

        sanitized = self.sanitizer.sanitize(html)

        assert 'href="https://news.example.com/release?id=42"' in sanitized
        assert "amp;id" not in sanitized


class TestSanitizerFailOpen:
    """Test fallback behavior on internal failure."""
    
    def setup_method(self):
        self.sanitizer = HtmlSanitizer()
    
    def test_non_string_input_returns_input(self):
        """Wrong input type degrades instead of raising."""
        result = self.sanitizer.run(12345)
        
        assert result.degraded
        assert result.value == 12345
        assert result.diagnostic.startswith("TypeError")
    
    def test_plain_text_failure_returns_input(self, monkeypatch):
        """Rule engine failure leaves the HTML unchanged."""
        def broken_rules(text, rules):
            raise RuntimeError("regex engine exploded")
        
        monkeypatch.setattr(html_sanitizer, "_apply_rules", broken_rules)
        html = "<p>Hi</p>"
        
        result = self.sanitizer.run_plain_text(html)
        
        assert result.degraded
        assert result.value == html
        assert result.diagnostic == "RuntimeError: regex engine exploded"
        assert self.sanitizer.to_plain_text(html) == html
