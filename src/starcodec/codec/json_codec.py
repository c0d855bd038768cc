"""
JSON codec for star collections.

Converts a star collection of any supported shape to JSON text and back.
One codec handles every shape; the ShapeDescriptor passed to each call
decides how the collection is wrapped on the wire.

Wire layout per shape:
- keyed:    {"sun": {...}, "sirius": {...}}
- sequence: [{...}, {...}]
- wrapped:  {"stars": [{...}, {...}]}

Each record is {"name": str, "distance": number, "constellation": str}.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import ValidationError

from starcodec.enums import Shape
from starcodec.models import Star, StarCatalog

from .errors import (
    CodecError,
    CodecIssue,
    DecodeError,
    EncodeError,
    format_location,
    issues_from_validation_error,
)
from .result import CodecResult
from .shape import ShapeDescriptor, ShapeLike, resolve_shape

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("name", "distance", "constellation")

Collection = Union[dict[str, Star], list[Star], StarCatalog]


@dataclass(frozen=True)
class CodecOptions:
    """
    Output options for the codec.

    Attributes:
        indent: Pretty-print with this indent, or None for compact output
        ensure_ascii: Escape non-ASCII characters instead of writing UTF-8
    """

    indent: Optional[int] = None
    ensure_ascii: bool = False


class _DuplicateKeyError(ValueError):
    """Raised while parsing when a JSON object repeats a key."""

    def __init__(self, key: str):
        super().__init__(f"Duplicate key '{key}'")
        self.key = key


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise _DuplicateKeyError(key)
        obj[key] = value
    return obj


class StructuredRecordCodec:
    """
    Encodes and decodes star collections as JSON.

    The codec is stateless apart from its options, so one instance can be
    shared freely.

    Usage:
        codec = StructuredRecordCodec()
        shape = ShapeDescriptor.keyed(["sun", "sirius"])

        text = codec.encode({"sun": sun, "sirius": sirius}, shape)
        stars = codec.decode(text, shape)
    """

    def __init__(self, options: Optional[CodecOptions] = None):
        """
        Initialize the codec.

        Args:
            options: Output options, defaults to compact UTF-8 output
        """
        self.options = options or CodecOptions()

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self, collection: Any, shape: ShapeLike) -> str:
        """
        Serialize a collection to JSON text.

        Args:
            collection: dict of Stars (keyed), list of Stars (sequence),
                or StarCatalog / list of Stars (wrapped)
            shape: Shape descriptor, or a bare Shape for unkeyed shapes

        Returns:
            JSON text

        Raises:
            EncodeError: If the collection does not fit the shape
        """
        descriptor = resolve_shape(shape)
        payload = self._build_payload(collection, descriptor)

        separators = (",", ":") if self.options.indent is None else (",", ": ")
        try:
            text = json.dumps(
                payload,
                indent=self.options.indent,
                ensure_ascii=self.options.ensure_ascii,
                separators=separators,
                allow_nan=False,
            )
        except ValueError as e:
            logger.warning(f"Cannot encode {descriptor.kind.value} collection: {e}")
            raise EncodeError("Cannot encode to JSON", [CodecIssue("", str(e))]) from e

        logger.debug(f"Encoded {descriptor.kind.value} collection ({len(text)} chars)")
        return text

    def _build_payload(self, collection: Any, descriptor: ShapeDescriptor) -> Any:
        """Turn a collection into plain JSON-ready data."""
        issues: list[CodecIssue] = []

        if descriptor.kind == Shape.KEYED:
            payload = self._keyed_payload(collection, descriptor, issues)
        elif descriptor.kind == Shape.SEQUENCE:
            if not isinstance(collection, (list, tuple)):
                raise EncodeError(
                    "Cannot encode to JSON",
                    [CodecIssue("", "Sequence shape expects a list of stars", type(collection).__name__)],
                )
            payload = self._records_payload(collection, (), issues)
        else:
            if isinstance(collection, StarCatalog):
                stars = collection.stars
            elif isinstance(collection, (list, tuple)):
                stars = collection
            else:
                raise EncodeError(
                    "Cannot encode to JSON",
                    [CodecIssue("", "Wrapped shape expects a StarCatalog or a list of stars", type(collection).__name__)],
                )
            payload = {descriptor.field: self._records_payload(stars, (descriptor.field,), issues)}

        if issues:
            logger.warning(f"Cannot encode {descriptor.kind.value} collection: {len(issues)} issue(s)")
            raise EncodeError("Cannot encode to JSON", issues)

        return payload

    def _keyed_payload(
        self, collection: Any, descriptor: ShapeDescriptor, issues: list[CodecIssue]
    ) -> dict[str, Any]:
        if not isinstance(collection, Mapping):
            raise EncodeError(
                "Cannot encode to JSON",
                [CodecIssue("", "Keyed shape expects a mapping of stars", type(collection).__name__)],
            )

        for key in collection:
            if key not in descriptor.keys:
                issues.append(CodecIssue(str(key), "Key is not declared by the shape"))

        payload: dict[str, Any] = {}
        for key in descriptor.keys:
            if key not in collection:
                issues.append(CodecIssue(key, "Field required"))
                continue
            payload[key] = self._record_payload(collection[key], (key,), issues)
        return payload

    def _records_payload(
        self, stars: Any, prefix: tuple, issues: list[CodecIssue]
    ) -> list[Any]:
        return [
            self._record_payload(star, (*prefix, index), issues)
            for index, star in enumerate(stars)
        ]

    @staticmethod
    def _record_payload(item: Any, location: tuple, issues: list[CodecIssue]) -> Any:
        """Convert one Star (or star-like mapping) to a plain dict."""
        if isinstance(item, Star):
            star = item
        elif isinstance(item, Mapping):
            try:
                star = Star.model_validate(dict(item))
            except ValidationError as e:
                issues.extend(issues_from_validation_error(e, *location))
                return None
        else:
            issues.append(
                CodecIssue(format_location(*location), "Expected a Star", type(item).__name__)
            )
            return None

        return star.model_dump()

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode(self, text: str | bytes | bytearray, shape: ShapeLike) -> Collection:
        """
        Parse JSON text back into a collection.

        Args:
            text: JSON text (str, or UTF-8 encoded bytes)
            shape: Shape descriptor, or a bare Shape for unkeyed shapes

        Returns:
            dict[str, Star] in declared key order (keyed), list[Star]
            (sequence), or StarCatalog (wrapped)

        Raises:
            DecodeError: If the text is malformed or does not fit the shape
        """
        descriptor = resolve_shape(shape)
        data = self._parse(text)
        issues: list[CodecIssue] = []

        if descriptor.kind == Shape.KEYED:
            result: Any = self._decode_keyed(data, descriptor, issues)
        elif descriptor.kind == Shape.SEQUENCE:
            result = self._decode_sequence(data, issues)
        else:
            result = self._decode_wrapped(data, descriptor, issues)

        if issues:
            logger.warning(f"JSON unmarshaling failed: {len(issues)} issue(s)")
            raise DecodeError("JSON unmarshaling failed", issues)

        logger.debug(f"Decoded {descriptor.kind.value} collection")
        return result

    @staticmethod
    def _parse(text: str | bytes | bytearray) -> Any:
        """Parse JSON text, rejecting syntax errors and duplicate keys."""
        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(
                    "JSON unmarshaling failed",
                    [CodecIssue(f"byte {e.start}", "Invalid UTF-8")],
                ) from e

        if not isinstance(text, str):
            raise DecodeError(
                "JSON unmarshaling failed",
                [CodecIssue("", "Expected JSON text", type(text).__name__)],
            )

        try:
            return json.loads(text, object_pairs_hook=_reject_duplicate_keys)
        except _DuplicateKeyError as e:
            raise DecodeError(
                "JSON unmarshaling failed", [CodecIssue(e.key, str(e))]
            ) from e
        except json.JSONDecodeError as e:
            raise DecodeError(
                "JSON unmarshaling failed",
                [CodecIssue(f"line {e.lineno} column {e.colno}", e.msg)],
            ) from e
        except RecursionError as e:
            raise DecodeError(
                "JSON unmarshaling failed", [CodecIssue("", "JSON nested too deeply")]
            ) from e

    def _decode_keyed(
        self, data: Any, descriptor: ShapeDescriptor, issues: list[CodecIssue]
    ) -> dict[str, Star]:
        if not isinstance(data, dict):
            issues.append(CodecIssue("", "Expected a JSON object", type(data).__name__))
            return {}

        extra = [key for key in data if key not in descriptor.keys]
        if extra:
            logger.debug(f"Ignoring undeclared keys: {', '.join(extra)}")

        stars: dict[str, Star] = {}
        for key in descriptor.keys:
            if key not in data:
                issues.append(CodecIssue(key, "Field required"))
                continue
            star = self._decode_record(data[key], (key,), issues)
            if star is not None:
                stars[key] = star
        return stars

    def _decode_sequence(self, data: Any, issues: list[CodecIssue]) -> list[Star]:
        if not isinstance(data, list):
            issues.append(CodecIssue("", "Expected a JSON array", type(data).__name__))
            return []
        return self._decode_records(data, (), issues)

    def _decode_wrapped(
        self, data: Any, descriptor: ShapeDescriptor, issues: list[CodecIssue]
    ) -> StarCatalog:
        if not isinstance(data, dict):
            issues.append(CodecIssue("", "Expected a JSON object", type(data).__name__))
            return StarCatalog()

        extra = [key for key in data if key != descriptor.field]
        if extra:
            logger.debug(f"Ignoring undeclared keys: {', '.join(extra)}")

        if descriptor.field not in data:
            issues.append(CodecIssue(descriptor.field, "Field required"))
            return StarCatalog()

        items = data[descriptor.field]
        if not isinstance(items, list):
            issues.append(
                CodecIssue(descriptor.field, "Expected a JSON array", type(items).__name__)
            )
            return StarCatalog()

        return StarCatalog(stars=self._decode_records(items, (descriptor.field,), issues))

    def _decode_records(
        self, items: list[Any], prefix: tuple, issues: list[CodecIssue]
    ) -> list[Star]:
        stars = []
        for index, item in enumerate(items):
            star = self._decode_record(item, (*prefix, index), issues)
            if star is not None:
                stars.append(star)
        return stars

    @staticmethod
    def _decode_record(item: Any, location: tuple, issues: list[CodecIssue]) -> Optional[Star]:
        """Validate one record mapping into a Star."""
        if not isinstance(item, dict):
            issues.append(
                CodecIssue(format_location(*location), "Expected a JSON object", type(item).__name__)
            )
            return None

        extra = [key for key in item if key not in RECORD_FIELDS]
        if extra:
            logger.debug(
                f"Ignoring unknown fields at {format_location(*location)}: {', '.join(extra)}"
            )

        try:
            return Star.model_validate(item)
        except ValidationError as e:
            issues.extend(issues_from_validation_error(e, *location))
            return None

    # ------------------------------------------------------------------
    # Tagged results
    # ------------------------------------------------------------------

    def try_encode(self, collection: Any, shape: ShapeLike) -> CodecResult[str]:
        """
        Like encode(), but report failure in the result instead of raising.

        An invalid shape argument is caller misuse and still raises ValueError.
        """
        try:
            return CodecResult.success(self.encode(collection, shape))
        except CodecError as e:
            return CodecResult.failure(e)

    def try_decode(
        self, text: str | bytes | bytearray, shape: ShapeLike
    ) -> CodecResult[Collection]:
        """
        Like decode(), but report failure in the result instead of raising.

        An invalid shape argument is caller misuse and still raises ValueError.
        """
        try:
            return CodecResult.success(self.decode(text, shape))
        except CodecError as e:
            return CodecResult.failure(e)


_default_codec = StructuredRecordCodec()


def encode(collection: Any, shape: ShapeLike) -> str:
    """
    Convenience function to encode with default options.

    Example:
        text = encode(stars, Shape.SEQUENCE)
    """
    return _default_codec.encode(collection, shape)


def decode(text: str | bytes | bytearray, shape: ShapeLike) -> Collection:
    """
    Convenience function to decode with default options.

    Example:
        stars = decode(text, Shape.SEQUENCE)
    """
    return _default_codec.decode(text, shape)


def try_encode(collection: Any, shape: ShapeLike) -> CodecResult[str]:
    """Convenience wrapper around StructuredRecordCodec.try_encode."""
    return _default_codec.try_encode(collection, shape)


def try_decode(text: str | bytes | bytearray, shape: ShapeLike) -> CodecResult[Collection]:
    """Convenience wrapper around StructuredRecordCodec.try_decode."""
    return _default_codec.try_decode(text, shape)
