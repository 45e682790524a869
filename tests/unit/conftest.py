"""Unit test fixtures (mocks and stubs).

Provides mock objects for forcing stage failures without touching real input.
"""

import pytest
from unittest.mock import Mock


@pytest.fixture
def broken_pattern():
    """Mock compiled regex whose every method raises.
    
    Drop it into a rule table or monkeypatch a module-level pattern to
    exercise a stage's fail-open path.
    """
    error = RuntimeError("pattern unavailable")
    mock = Mock()
    mock.search = Mock(side_effect=error)
    mock.sub = Mock(side_effect=error)
    mock.finditer = Mock(side_effect=error)
    return mock
