"""Shared test fixtures for the MIME test suite."""

from __future__ import annotations

import logging

import pytest
import structlog

from umbrella_mime.decoder import MimeDecoder
from umbrella_mime.encoder import MimeEncoder

# ------------------------------------------------------------------
# Sample messages
# ------------------------------------------------------------------

BASIC_MULTIPART = (
    "From: sender@example.com\n"
    "Date: Mon, 01 Jan 2024 12:00:00 -0800\n"
    "MIME-Version: 1.0\n"
    'Content-Type: multipart/mixed; boundary="simple"\n'
    "\n"
    "--simple\n"
    "Content-Type: text/plain\n"
    "\n"
    "Hello, World!\n"
    "--simple\n"
    "Content-Type: text/html\n"
    "\n"
    "<h1>Hello, World!</h1>\n"
    "--simple--\n"
)

NESTED_MULTIPART = (
    "From: sender@example.com\n"
    "To: recipient@example.com\n"
    "Subject: Nested\n"
    "MIME-Version: 1.0\n"
    'Content-Type: multipart/mixed; boundary="outer"\n'
    "\n"
    "--outer\n"
    'Content-Type: multipart/alternative; boundary="alt"\n'
    "\n"
    "--alt\n"
    "Content-Type: text/plain; charset=utf-8\n"
    "\n"
    "Plain body\n"
    "--alt\n"
    "Content-Type: multipart/related; boundary=rel\n"
    "\n"
    "--rel\n"
    'Content-Type: text/html; charset="utf-8"\n'
    "Content-ID: <html-part@example.com>\n"
    "\n"
    "<p>HTML body</p>\n"
    "--rel\n"
    "Content-Type: image/png\n"
    "Content-ID: <logo@example.com>\n"
    "Content-Transfer-Encoding: base64\n"
    "\n"
    "iVBORw0KGgo=\n"
    "--rel--\n"
    "--alt--\n"
    "--outer\n"
    "Content-Type: application/pdf\n"
    'Content-Disposition: attachment; filename="report.pdf"; name="report"\n'
    "Content-Transfer-Encoding: base64\n"
    "\n"
    "JVBERi0xLjQ=\n"
    "--outer--\n"
    "epilogue text\n"
)

PLAIN_MESSAGE = (
    "From: sender@example.com\n"
    "To: recipient@example.com\n"
    "Date: Mon, 01 Jan 2024 12:00:00 -0800\n"
    "Subject: Test Message\n"
    "MIME-Version: 1.0\n"
    "Content-Type: text/plain\n"
    "\n"
    "Body content"
)

EMPTY_PARTS = (
    'Content-Type: multipart/mixed; boundary="empty"\n'
    "\n"
    "--empty\n"
    "Content-Type: text/plain\n"
    "\n"
    "--empty\n"
    "Content-Type: text/html\n"
    "\n"
    "--empty--\n"
)

BOOKMARK = (
    "From: Reader <reader@example.com>\n"
    "Date: Wed, 15 Oct 2025 18:42:00 -0700\n"
    "MIME-Version: 1.0\n"
    'Content-Type: multipart/bookmark; boundary="bookmark"\n'
    "\n"
    "--bookmark\n"
    "Content-Type: text/book-info\n"
    "Title: Why Greatness Cannot Be Planned\n"
    "Authors: Kenneth O. Stanley, Joel Lehman\n"
    "ISBN-13: 978-3319155234\n"
    "\n"
    "--bookmark\n"
    'Content-Type: text/note; charset="utf-8"\n'
    "Page: 10\n"
    "\n"
    "This book is turning out to be very cathartic.\n"
    "\n"
    "--bookmark\n"
    "Content-Type: text/progress\n"
    "Page: 65\n"
    "\n"
    "--bookmark\n"
    'Content-Type: text/review; charset="utf-8"\n'
    "Rating: 4.5\n"
    "Spoilers: false\n"
    "\n"
    "I enjoyed this book!\n"
    "--bookmark--\n"
)


@pytest.fixture
def decoder() -> MimeDecoder:
    return MimeDecoder()


@pytest.fixture
def encoder() -> MimeEncoder:
    return MimeEncoder()


@pytest.fixture
def restore_logging():
    """Undo setup_logging side effects on the root logger and structlog."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
