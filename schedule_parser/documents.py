# -*- coding: utf-8 -*-
"""Loading of schedule documents (HTML grids and course PDFs) from disk or URL."""
from __future__ import annotations

import io
from pathlib import Path

import pdfplumber
import requests

FETCH_TIMEOUT = 30


def _read_bytes(path_or_url: str) -> bytes:
    """
    Reads a document from a local path or a URL.
    :param path_or_url: A local file path or an http(s) URL.
    :return: The raw document bytes.
    """
    if path_or_url.startswith(("http://", "https://")):
        response = requests.get(path_or_url, timeout=FETCH_TIMEOUT)
        response.raise_for_status()
        return response.content
    path = Path(path_or_url)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_bytes()


def read_schedule_html(path_or_url: str) -> str:
    """Reads a calendar-grid schedule document as text."""
    return _read_bytes(path_or_url).decode("utf-8", errors="replace")


def extract_pdf_pages(path_or_url: str) -> list[str]:
    """
    Extracts the text of a local or remote PDF, one string per non-empty page.
    :param path_or_url: A local file path or a URL to a PDF file.
    :return: The stripped page texts in page order.
    """
    with pdfplumber.open(io.BytesIO(_read_bytes(path_or_url))) as pdf:
        texts = (page.extract_text() for page in pdf.pages)
        return [text.strip() for text in texts if text]
