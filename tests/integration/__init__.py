"""
Integration tests for Auto Classifier.

Test components together against a temporary vault on disk:
- Classify pipeline (references -> orchestrator -> backend client -> validator -> Markdown host)
- Filename suggestion (prompt -> backend client -> sanitize -> unique path -> rename)

Backends are replaced by httpx.MockTransport; no network access is needed.
"""
