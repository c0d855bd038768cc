"""
Tests for the JSON star codec.
"""

import json

import pytest

from starcodec.catalog import BRIGHTEST_STAR_KEYS, BRIGHTEST_STARS, catalog_for
from starcodec.codec import (
    CodecOptions,
    CodecResult,
    DecodeError,
    EncodeError,
    ShapeDescriptor,
    StructuredRecordCodec,
    decode,
    encode,
    resolve_shape,
    try_decode,
    try_encode,
)
from starcodec.enums import Shape
from starcodec.models import Star, StarCatalog

SUN = Star(name="Sun", distance=0.000015813, constellation="")
SIRIUS = Star(name="Sirius", distance=8.6, constellation="Canis Major")


@pytest.fixture
def codec():
    """Codec with default options."""
    return StructuredRecordCodec()


@pytest.fixture
def keyed_shape():
    """Two-slot keyed shape."""
    return ShapeDescriptor.keyed(["sun", "sirius"])


class TestShapeDescriptor:
    """Tests for shape descriptors."""

    def test_keyed_keeps_order(self):
        """Test that keyed descriptors keep declared key order."""
        shape = ShapeDescriptor.keyed(["b", "a", "c"])
        assert shape.keys == ("b", "a", "c")

    def test_keyed_requires_keys(self):
        """Test that a keyed descriptor needs at least one key."""
        with pytest.raises(ValueError):
            ShapeDescriptor.keyed([])

    def test_keyed_rejects_duplicates(self):
        """Test that duplicate keys are rejected."""
        with pytest.raises(ValueError, match="sun"):
            ShapeDescriptor.keyed(["sun", "sirius", "sun"])

    def test_keys_only_for_keyed(self):
        """Test that keys are refused on other shapes."""
        with pytest.raises(ValueError):
            ShapeDescriptor(kind=Shape.SEQUENCE, keys=("sun",))

    def test_resolve_bare_shapes(self):
        """Test resolving bare Shape tags and strings."""
        assert resolve_shape(Shape.SEQUENCE) == ShapeDescriptor.sequence()
        assert resolve_shape("wrapped") == ShapeDescriptor.wrapped()

    def test_resolve_bare_keyed_fails(self):
        """Test that a bare keyed shape cannot be resolved."""
        with pytest.raises(ValueError):
            resolve_shape(Shape.KEYED)

    def test_resolve_unknown_shape(self):
        """Test that unknown shape names are rejected."""
        with pytest.raises(ValueError):
            resolve_shape("table")


class TestEncode:
    """Tests for encoding collections."""

    def test_sequence_scenario(self, codec):
        """Test the two-record sequence encodes in order with exact values."""
        text = codec.encode([SUN, SIRIUS], Shape.SEQUENCE)
        assert text == (
            '[{"name":"Sun","distance":1.5813e-05,"constellation":""},'
            '{"name":"Sirius","distance":8.6,"constellation":"Canis Major"}]'
        )

    def test_keyed_emits_declared_order(self, codec, keyed_shape):
        """Test that keyed output follows the descriptor, not the mapping."""
        text = codec.encode({"sirius": SIRIUS, "sun": SUN}, keyed_shape)
        assert list(json.loads(text)) == ["sun", "sirius"]

    def test_keyed_includes_empty_fields(self, codec):
        """Test that slots holding empty strings are still emitted once."""
        shape = ShapeDescriptor.keyed(["blank"])
        text = codec.encode({"blank": Star(name="", distance=0, constellation="")}, shape)
        assert json.loads(text) == {"blank": {"name": "", "distance": 0.0, "constellation": ""}}
        assert text.count('"blank"') == 1

    def test_wrapped_uses_field_name(self, codec):
        """Test that the wrapper key comes from the descriptor."""
        text = codec.encode(StarCatalog(stars=[SIRIUS]), ShapeDescriptor.wrapped("brightest"))
        assert list(json.loads(text)) == ["brightest"]

    def test_wrapped_accepts_list(self, codec):
        """Test that a plain list can be encoded as wrapped."""
        text = codec.encode([SUN], Shape.WRAPPED)
        assert json.loads(text) == {"stars": [{"name": "Sun", "distance": 1.5813e-05, "constellation": ""}]}

    def test_accepts_star_dicts(self, codec):
        """Test that star-like mappings are validated and encoded."""
        text = codec.encode([{"name": "Vega", "distance": 25, "constellation": "Lyra"}], Shape.SEQUENCE)
        assert json.loads(text)[0]["distance"] == 25.0

    def test_non_ascii_kept(self, codec):
        """Test that non-ASCII characters are written as UTF-8 text."""
        arcturus = BRIGHTEST_STARS[-1]
        text = codec.encode([arcturus], Shape.SEQUENCE)
        assert "Boötes" in text

    def test_ensure_ascii_option(self):
        """Test escaping non-ASCII characters."""
        codec = StructuredRecordCodec(CodecOptions(ensure_ascii=True))
        text = codec.encode([BRIGHTEST_STARS[-1]], Shape.SEQUENCE)
        assert "Bo\\u00f6tes" in text

    def test_indent_option(self):
        """Test pretty-printed output."""
        codec = StructuredRecordCodec(CodecOptions(indent=2))
        text = codec.encode([SUN], Shape.SEQUENCE)
        assert '\n  {\n    "name": "Sun",' in text

    def test_empty_sequence(self, codec):
        """Test encoding an empty sequence."""
        assert codec.encode([], Shape.SEQUENCE) == "[]"

    @pytest.mark.parametrize("shape", list(Shape))
    def test_deterministic(self, codec, shape):
        """Test that encoding twice yields identical text."""
        collection, descriptor = catalog_for(shape)
        assert codec.encode(collection, descriptor) == codec.encode(collection, descriptor)

    def test_keyed_missing_slot(self, codec, keyed_shape):
        """Test that a missing keyed slot fails."""
        with pytest.raises(EncodeError) as exc_info:
            codec.encode({"sun": SUN}, keyed_shape)
        assert [i.location for i in exc_info.value.issues] == ["sirius"]

    def test_keyed_undeclared_slot(self, codec, keyed_shape):
        """Test that keys outside the descriptor fail."""
        with pytest.raises(EncodeError) as exc_info:
            codec.encode({"sun": SUN, "sirius": SIRIUS, "vega": SIRIUS}, keyed_shape)
        assert exc_info.value.issues[0].location == "vega"

    def test_keyed_requires_mapping(self, codec, keyed_shape):
        """Test that a list cannot be encoded as keyed."""
        with pytest.raises(EncodeError):
            codec.encode([SUN, SIRIUS], keyed_shape)

    def test_sequence_rejects_mapping(self, codec):
        """Test that a dict cannot be encoded as a sequence."""
        with pytest.raises(EncodeError):
            codec.encode({"sun": SUN}, Shape.SEQUENCE)

    def test_wrapped_rejects_string(self, codec):
        """Test that a string cannot be encoded as wrapped."""
        with pytest.raises(EncodeError):
            codec.encode("Sun", Shape.WRAPPED)

    def test_invalid_element(self, codec):
        """Test that an invalid element is reported with its index."""
        with pytest.raises(EncodeError) as exc_info:
            codec.encode([SUN, {"name": "Bad", "distance": -1, "constellation": ""}], Shape.SEQUENCE)
        assert exc_info.value.issues[0].location == "[1].distance"

    def test_non_star_element(self, codec):
        """Test that arbitrary objects are rejected."""
        with pytest.raises(EncodeError) as exc_info:
            codec.encode([SUN, 42], Shape.SEQUENCE)
        assert exc_info.value.issues[0].location == "[1]"

    def test_unvalidated_nan_rejected(self, codec):
        """Test that a NaN smuggled past validation still fails to encode."""
        star = Star.model_construct(name="Bad", distance=float("nan"), constellation="")
        with pytest.raises(EncodeError):
            codec.encode([star], Shape.SEQUENCE)


class TestDecode:
    """Tests for decoding JSON text."""

    def test_sequence_scenario(self, codec):
        """Test decoding the two-record sequence restores both records in order."""
        text = codec.encode([SUN, SIRIUS], Shape.SEQUENCE)
        assert codec.decode(text, Shape.SEQUENCE) == [SUN, SIRIUS]

    def test_numeric_fidelity(self, codec):
        """Test that small distances survive exactly."""
        decoded = codec.decode(codec.encode([SUN], Shape.SEQUENCE), Shape.SEQUENCE)
        assert decoded[0].distance == 0.000015813

    def test_decimal_notation_accepted(self, codec):
        """Test decoding a distance written without an exponent."""
        text = '[{"name":"Sun","distance":0.000015813,"constellation":""}]'
        assert codec.decode(text, Shape.SEQUENCE) == [SUN]

    def test_integer_distance(self, codec):
        """Test that integer JSON numbers decode as floats."""
        text = '[{"name":"Canopus","distance":310,"constellation":"Carina"}]'
        star = codec.decode(text, Shape.SEQUENCE)[0]
        assert star.distance == 310.0
        assert isinstance(star.distance, float)

    def test_keyed_returns_declared_order(self, codec, keyed_shape):
        """Test that keyed output is ordered by the descriptor."""
        text = json.dumps({"sirius": SIRIUS.model_dump(), "sun": SUN.model_dump()})
        decoded = codec.decode(text, keyed_shape)
        assert list(decoded) == ["sun", "sirius"]
        assert decoded["sirius"] == SIRIUS

    def test_wrapped_returns_catalog(self, codec):
        """Test that wrapped text decodes to a StarCatalog."""
        text = '{"stars":[{"name":"Sun","distance":1.5813e-05,"constellation":""}]}'
        decoded = codec.decode(text, Shape.WRAPPED)
        assert isinstance(decoded, StarCatalog)
        assert decoded.stars == [SUN]

    def test_accepts_bytes(self, codec):
        """Test decoding UTF-8 bytes."""
        text = '[{"name":"Arcturus","distance":37,"constellation":"Boötes"}]'.encode("utf-8")
        assert codec.decode(text, Shape.SEQUENCE)[0].constellation == "Boötes"

    def test_invalid_utf8(self, codec):
        """Test that invalid UTF-8 bytes fail."""
        with pytest.raises(DecodeError):
            codec.decode(b'[{"name":"\xff"}]', Shape.SEQUENCE)

    def test_extra_fields_ignored(self, codec, keyed_shape):
        """Test that unknown keys are ignored at every level."""
        text = json.dumps({
            "sun": {**SUN.model_dump(), "magnitude": -26.7},
            "sirius": SIRIUS.model_dump(),
            "vega": SIRIUS.model_dump(),
        })
        assert codec.decode(text, keyed_shape) == {"sun": SUN, "sirius": SIRIUS}

    def test_syntax_error(self, codec):
        """Test that malformed JSON fails."""
        with pytest.raises(DecodeError) as exc_info:
            codec.decode('[{"name": "Sun",', Shape.SEQUENCE)
        assert exc_info.value.issues[0].location.startswith("line 1")

    def test_duplicate_keys(self, codec, keyed_shape):
        """Test that repeated keys fail instead of silently overwriting."""
        text = (
            '{"sun":{"name":"Sun","distance":0,"constellation":""},'
            '"sun":{"name":"Sun","distance":1,"constellation":""},'
            '"sirius":{"name":"Sirius","distance":8.6,"constellation":"Canis Major"}}'
        )
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(text, keyed_shape)
        assert exc_info.value.issues[0].location == "sun"

    def test_duplicate_record_field(self, codec):
        """Test that a record repeating a field fails."""
        text = '[{"name":"Sun","name":"Sol","distance":0,"constellation":""}]'
        with pytest.raises(DecodeError):
            codec.decode(text, Shape.SEQUENCE)

    def test_missing_name(self, codec):
        """Test that a record without a name fails."""
        text = '[{"distance":8.6,"constellation":"Canis Major"}]'
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(text, Shape.SEQUENCE)
        assert exc_info.value.issues[0].location == "[0].name"

    def test_missing_keyed_slot(self, codec, keyed_shape):
        """Test that a missing keyed slot fails."""
        text = json.dumps({"sun": SUN.model_dump()})
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(text, keyed_shape)
        assert [i.location for i in exc_info.value.issues] == ["sirius"]

    def test_missing_wrapper_field(self, codec):
        """Test that a wrapped object without its field fails."""
        with pytest.raises(DecodeError):
            codec.decode('{"items":[]}', Shape.WRAPPED)

    def test_wrapper_field_not_array(self, codec):
        """Test that a wrapper field holding an object fails."""
        with pytest.raises(DecodeError):
            codec.decode('{"stars":{}}', Shape.WRAPPED)

    @pytest.mark.parametrize(
        "text,shape",
        [
            ("{}", Shape.SEQUENCE),
            ("[]", Shape.WRAPPED),
            ('"stars"', Shape.WRAPPED),
            ("null", Shape.SEQUENCE),
        ],
    )
    def test_wrong_top_level_type(self, codec, text, shape):
        """Test that the top-level JSON type must fit the shape."""
        with pytest.raises(DecodeError):
            codec.decode(text, shape)

    def test_record_not_object(self, codec):
        """Test that list elements must be objects."""
        with pytest.raises(DecodeError) as exc_info:
            codec.decode('[["Sun", 0, ""]]', Shape.SEQUENCE)
        assert exc_info.value.issues[0].location == "[0]"

    @pytest.mark.parametrize("distance", ['"8.6"', "true", "-1", "NaN", "Infinity", "null"])
    def test_bad_distance(self, codec, distance):
        """Test that non-numeric, negative and non-finite distances fail."""
        text = f'[{{"name":"Sirius","distance":{distance},"constellation":"Canis Major"}}]'
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(text, Shape.SEQUENCE)
        assert exc_info.value.issues[0].location == "[0].distance"

    def test_bad_name_type(self, codec):
        """Test that a numeric name fails."""
        with pytest.raises(DecodeError):
            codec.decode('[{"name":1,"distance":1,"constellation":""}]', Shape.SEQUENCE)

    def test_reports_all_issues(self, codec):
        """Test that every bad record is reported, not just the first."""
        text = json.dumps({"stars": [
            {"distance": 1, "constellation": ""},
            SIRIUS.model_dump(),
            {"name": "Bad", "distance": "far", "constellation": ""},
        ]})
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(text, Shape.WRAPPED)
        locations = [i.location for i in exc_info.value.issues]
        assert locations == ["stars[0].name", "stars[2].distance"]

    def test_non_text_input(self, codec):
        """Test that non-text input fails."""
        with pytest.raises(DecodeError):
            codec.decode(42, Shape.SEQUENCE)

    def test_deeply_nested(self, codec):
        """Test that well-formed but deeply nested JSON fails cleanly."""
        text = "[" * 100000 + "]" * 100000
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(text, Shape.SEQUENCE)
        assert exc_info.value.issues[0].message == "JSON nested too deeply"


class TestRoundTrip:
    """Tests for the decode(encode(x)) == x law."""

    @pytest.mark.parametrize("shape", list(Shape))
    def test_bright_star_catalog(self, codec, shape):
        """Test round-tripping the bright-star catalog in every shape."""
        collection, descriptor = catalog_for(shape)
        assert codec.decode(codec.encode(collection, descriptor), descriptor) == collection

    @pytest.mark.parametrize("shape", [Shape.SEQUENCE, Shape.WRAPPED])
    def test_order_preserved(self, codec, shape):
        """Test that reversed order survives a round trip."""
        stars = list(reversed(BRIGHTEST_STARS))
        decoded = codec.decode(codec.encode(stars, shape), shape)
        names = decoded.names if isinstance(decoded, StarCatalog) else [s.name for s in decoded]
        assert names == [s.name for s in stars]

    def test_keyed_reencode_stable(self, codec):
        """Test that encode(decode(text)) reproduces the text."""
        collection, descriptor = catalog_for(Shape.KEYED)
        text = codec.encode(collection, descriptor)
        assert codec.encode(codec.decode(text, descriptor), descriptor) == text

    def test_pretty_text_reencodes_compact(self, codec):
        """Test that pretty input re-encodes to the canonical compact form."""
        pretty = StructuredRecordCodec(CodecOptions(indent=4))
        collection, descriptor = catalog_for(Shape.WRAPPED)
        text = pretty.encode(collection, descriptor)
        assert codec.encode(codec.decode(text, descriptor), descriptor) == codec.encode(collection, descriptor)

    def test_keyed_all_slots(self, codec):
        """Test that every declared key appears exactly once."""
        collection, descriptor = catalog_for(Shape.KEYED)
        data = json.loads(codec.encode(collection, descriptor))
        assert list(data) == list(BRIGHTEST_STAR_KEYS)


class TestTaggedResults:
    """Tests for try_encode / try_decode."""

    def test_success(self):
        """Test a successful encode result."""
        result = try_encode([SUN], Shape.SEQUENCE)
        assert isinstance(result, CodecResult)
        assert result.ok
        assert result.unwrap() == encode([SUN], Shape.SEQUENCE)
        assert result.summary() == "OK"

    def test_decode_failure(self):
        """Test that a failed decode is returned, not raised."""
        result = try_decode("[{]", Shape.SEQUENCE)
        assert not result.ok
        assert isinstance(result.error, DecodeError)
        assert result.issues
        assert result.summary().startswith("DecodeError:")
        with pytest.raises(DecodeError):
            result.unwrap()

    def test_encode_failure(self):
        """Test that a failed encode is returned, not raised."""
        result = try_encode({"sun": SUN}, ShapeDescriptor.keyed(["sun", "sirius"]))
        assert not result.ok
        assert isinstance(result.error, EncodeError)

    def test_deeply_nested_failure(self):
        """Test that deeply nested input is returned as a failed result."""
        result = try_decode("[" * 100000 + "]" * 100000, Shape.SEQUENCE)
        assert not result.ok
        assert isinstance(result.error, DecodeError)

    def test_invalid_shape_still_raises(self):
        """Test that a bare keyed shape is refused before any result is built."""
        with pytest.raises(ValueError):
            try_decode("{}", Shape.KEYED)

    def test_module_decode(self):
        """Test the module-level decode helper."""
        text = encode([SUN, SIRIUS], Shape.SEQUENCE)
        assert decode(text, Shape.SEQUENCE) == [SUN, SIRIUS]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
