"""Pytest configuration and shared fixtures for the mdcanon test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from io import StringIO
from typing import Callable, Iterable

import pytest
from hypothesis import Phase, Verbosity, settings

from mdcanon.events import Event
from mdcanon.options import MarkdownFormatOptions
from mdcanon.renderers import MarkdownRenderer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


@pytest.fixture
def render() -> Callable[..., str]:
    """Render an event list with a fresh renderer.

    Returns
    -------
    callable
        ``render(events, references=(), **option_fields) -> str``

    """

    def _render(events: Iterable[Event], references=(), **kwargs) -> str:
        renderer = MarkdownRenderer(MarkdownFormatOptions(**kwargs))
        return renderer.render_to_string(events, references)

    return _render


@pytest.fixture
def sink() -> StringIO:
    """Provide an in-memory text sink."""
    return StringIO()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with a working directory and home directory free of config files.

    Yields
    ------
    Path
        The temporary working directory

    """
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("MDCANON_CONFIG", raising=False)
    monkeypatch.chdir(work)
    yield work


@pytest.fixture
def sample_markdown() -> str:
    """Provide a document that is already in canonical form.

    Returns
    -------
    str
        Canonical markdown exercising most block and inline constructs.

    """
    return """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.

## Section 2

Here is a list:

- Item 1
- Item 2
- Item 3

> Quoted text
> over two lines

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
| -------- | -------- |
| Row 1    | Data 1   |

See [the docs][docs].

[docs]: https://example.com/docs
"""
