"""Upstream LLM integration layer.

This package is intentionally small and conservative:
- No prompt/reply logging (user content).
- Configurable via environment variables, resolved once at startup.
- Treated as a pure/stateless function by callers.
"""
