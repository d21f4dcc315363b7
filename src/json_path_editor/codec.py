"""Serialized document format: UTF-8 JSON text, pretty-printed on write.

Every write uses the same indentation and keeps key order, so successive
versions of a document differ only where they were edited.

Decoding is strict: the ``NaN``, ``Infinity`` and ``-Infinity`` literals that
``json.loads`` accepts by default are rejected, and text nested too deeply for
the interpreter's recursion limit fails as a ``DecodeError`` like any other
malformed document.
"""

from __future__ import annotations

import json
from typing import Any

from json_path_editor.algorithm.config import EditorConfig

__all__ = ["DecodeError", "decode", "encode"]

DecodeError = json.JSONDecodeError


class _NonFiniteLiteral(ValueError):
    """Raised from ``parse_constant`` for NaN and the infinities."""


def _reject_constant(name: str) -> Any:
    raise _NonFiniteLiteral(name)


def decode(text: str) -> Any:
    """Parse document text.

    Raises:
        DecodeError: If ``text`` is not valid JSON, spells a non-finite number,
            or nests too deeply to decode.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except _NonFiniteLiteral as exc:
        name = str(exc)
        msg = f"{name} is not a JSON value"
        raise DecodeError(msg, text, max(text.find(name), 0)) from exc
    except RecursionError as exc:
        raise DecodeError("Document nests too deeply to decode", text, 0) from exc


def encode(document: Any, config: EditorConfig | None = None) -> str:
    """Serialize ``document`` with the configured indentation.

    Raises:
        ValueError: If the document holds NaN or an infinity.
        TypeError: If the document holds a value with no JSON form.
        RecursionError: If the document nests too deeply to serialize.
    """
    cfg = config if config is not None else EditorConfig()
    return json.dumps(
        document,
        indent=cfg.indent,
        ensure_ascii=cfg.ensure_ascii,
        allow_nan=False,
    )
