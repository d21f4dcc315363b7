"""Integrations subpackage for json-path-editor.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point) providing the
  ``document_store`` and ``assert_shares_structure`` fixtures
"""

from __future__ import annotations

__all__: list[str] = []
