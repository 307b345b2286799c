"""
Unit tests for Auto Classifier.

Test individual components in isolation:
- Data models and settings (validation, constraints, template swap)
- Backend clients (httpx.MockTransport)
- Validation stages and zero-shot ranking
- Reference resolution and the Markdown host
- Engines and orchestrators (mocked host collaborators)
"""
