"""Codec configuration extraction.

The codec is selected with a single attribute on the subject type:

    redis_serializer(json)

The payload must be exactly one parenthesized identifier. Attributes
with a qualified path (e.g. other.redis_serializer) are not ours and are
skipped. Without the attribute the default binary codec is used.
"""

from __future__ import annotations

import io
import keyword
import tokenize
from collections.abc import Iterable

from redis_derive.core.descriptor import (
    DEFAULT_CODEC,
    SERIALIZER_ATTRIBUTE,
    Attribute,
    CodecReference,
)
from redis_derive.exceptions import ConfigurationError

_SKIPPED_TOKENS = frozenset(
    {tokenize.NEWLINE, tokenize.NL, tokenize.ENDMARKER, tokenize.INDENT, tokenize.DEDENT}
)


def _strip_group(attribute: Attribute) -> str:
    """Return the content of the single parenthesized group of the payload."""
    payload = attribute.tokens.strip()
    if not payload.startswith("("):
        raise ConfigurationError(
            f"{SERIALIZER_ATTRIBUTE} expects a parenthesized codec name, got {payload!r}",
            attribute=str(attribute),
        )
    depth = 0
    for index, char in enumerate(payload):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                if payload[index + 1 :].strip():
                    raise ConfigurationError(
                        f"Unexpected tokens after {SERIALIZER_ATTRIBUTE}(...): "
                        f"{payload[index + 1 :].strip()!r}",
                        attribute=str(attribute),
                    )
                return payload[1:index]
    raise ConfigurationError(
        f"Unbalanced parentheses in {SERIALIZER_ATTRIBUTE} payload {payload!r}",
        attribute=str(attribute),
    )


def _tokens(content: str, attribute: Attribute) -> list[tokenize.TokenInfo]:
    try:
        return [
            tok
            for tok in tokenize.generate_tokens(io.StringIO(content).readline)
            if tok.type not in _SKIPPED_TOKENS
        ]
    except (tokenize.TokenError, SyntaxError) as e:
        raise ConfigurationError(
            f"Cannot tokenize {SERIALIZER_ATTRIBUTE} payload: {e}",
            attribute=str(attribute),
        ) from e


def parse_codec_payload(attribute: Attribute) -> CodecReference:
    """Parse redis_serializer(<ident>) into a CodecReference."""
    tokens = _tokens(_strip_group(attribute).strip(), attribute)
    if not tokens:
        raise ConfigurationError(
            f"{SERIALIZER_ATTRIBUTE}() is missing the codec name",
            attribute=str(attribute),
        )
    if len(tokens) > 1:
        found = " ".join(tok.string for tok in tokens)
        raise ConfigurationError(
            f"{SERIALIZER_ATTRIBUTE} expects exactly one identifier, got {found!r}",
            attribute=str(attribute),
        )
    (token,) = tokens
    if token.type != tokenize.NAME or keyword.iskeyword(token.string):
        raise ConfigurationError(
            f"{SERIALIZER_ATTRIBUTE} codec name must be an identifier, got {token.string!r}",
            attribute=str(attribute),
        )
    return CodecReference(token.string)


def extract_codec(attributes: Iterable[Attribute]) -> CodecReference:
    """Return the codec configured by the attributes, or the default codec."""
    for attribute in attributes:
        if attribute.path == (SERIALIZER_ATTRIBUTE,):
            return parse_codec_payload(attribute)
    return CodecReference(DEFAULT_CODEC)


__all__ = ["extract_codec", "parse_codec_payload"]
