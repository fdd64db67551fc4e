"""NixOS-on-WSL installer (Python-first, step-driven).

Core design goals:
- Idempotent steps gated on live host state
- One immutable config passed to every step
- Fail fast: the first failing step ends the run
- Centralized logging
"""

__all__ = []
