"""Unit tests for Envelope, ProviderConfig and HandshakeResponse models."""

import json

import pytest
from pydantic import ValidationError

from models.config import OutputFormat, ProviderConfig, Variant
from models.envelope import Envelope
from models.handshake import HandshakeResponse


class TestEnvelope:
    """Tests for Envelope parsing and serialization."""

    def test_parses_wire_keys(self):
        env = Envelope.model_validate_json(
            '{"source":"counter","type":"tick","data":{"value":42},"metadata":{"seq":1}}'
        )
        assert env.source == "counter"
        assert env.type == "tick"
        assert env.payload == {"value": 42}
        assert env.metadata == {"seq": 1}

    def test_accepts_payload_key(self):
        env = Envelope.model_validate({"payload": [1, 2]})
        assert env.payload == [1, 2]

    def test_defaults_when_fields_absent(self):
        env = Envelope.model_validate_json("{}")
        assert env.source == ""
        assert env.type == ""
        assert env.payload is None
        assert env.metadata is None

    def test_null_source_and_type_become_empty(self):
        env = Envelope.model_validate_json('{"source":null,"type":null}')
        assert env.source == ""
        assert env.type == ""

    def test_ignores_unknown_keys(self):
        env = Envelope.model_validate_json('{"source":"a","extra":true}')
        assert env.source == "a"

    def test_rejects_numeric_source(self):
        with pytest.raises(ValidationError):
            Envelope.model_validate_json('{"source":5}')

    def test_rejects_non_object(self):
        with pytest.raises(ValidationError):
            Envelope.model_validate_json("[1, 2, 3]")

    def test_metadata_keeps_insertion_order(self):
        env = Envelope.model_validate_json('{"metadata":{"z":1,"a":2,"m":3}}')
        assert list(env.metadata) == ["z", "a", "m"]

    def test_is_frozen(self):
        env = Envelope(source="a")
        with pytest.raises(ValidationError):
            env.source = "b"

    def test_to_wire_uses_data_key(self):
        env = Envelope(source="a", type="t", payload={"x": 1.5})
        assert env.to_wire() == {
            "source": "a",
            "type": "t",
            "data": {"x": 1.5},
            "metadata": None,
        }

    def test_payload_round_trips(self):
        payload = {"nested": {"list": [1, 2.5, "s", None, True]}, "n": -3}
        line = json.dumps({"data": payload})

        env = Envelope.model_validate_json(line)

        assert json.loads(json.dumps(env.to_wire()))["data"] == payload


class TestProviderConfig:
    """Tests for ProviderConfig parsing."""

    def test_parses_output_format(self):
        config = ProviderConfig.model_validate({"outputFormat": "compact"})
        assert config.output_format == OutputFormat.COMPACT

    def test_output_format_case_insensitive(self):
        config = ProviderConfig.model_validate({"outputFormat": " JSON "})
        assert config.output_format == OutputFormat.JSON

    def test_unknown_output_format_is_none(self):
        config = ProviderConfig.model_validate({"outputFormat": "yaml"})
        assert config.output_format is None

    def test_non_string_output_format_is_none(self):
        config = ProviderConfig.model_validate({"outputFormat": 3})
        assert config.output_format is None

    def test_accepts_field_name(self):
        config = ProviderConfig(output_format=OutputFormat.SIMPLE)
        assert config.output_format == OutputFormat.SIMPLE

    def test_settings_default_empty(self):
        assert ProviderConfig().settings == {}
        assert ProviderConfig.model_validate({"settings": None}).settings == {}

    def test_settings_kept_as_given(self):
        config = ProviderConfig.model_validate(
            {"outputFormat": "json", "settings": {"color": False, "width": 80}}
        )
        assert config.settings == {"color": False, "width": 80}

    def test_rejects_non_mapping_settings(self):
        with pytest.raises(ValidationError):
            ProviderConfig.model_validate({"settings": [1, 2]})

    def test_ignores_unknown_keys(self):
        config = ProviderConfig.model_validate({"outputFormat": "json", "other": 1})
        assert config.output_format == OutputFormat.JSON


class TestResolveFormat:
    """Tests for per-variant format resolution."""

    @pytest.mark.parametrize(
        "value,variant,expected",
        [
            (None, Variant.FULL, OutputFormat.STRUCTURED),
            (None, Variant.MINIMAL, OutputFormat.SIMPLE),
            ("compact", Variant.FULL, OutputFormat.COMPACT),
            ("compact", Variant.MINIMAL, OutputFormat.SIMPLE),
            ("json", Variant.FULL, OutputFormat.JSON),
            ("json", Variant.MINIMAL, OutputFormat.JSON),
            ("simple", Variant.FULL, OutputFormat.STRUCTURED),
            ("bogus", Variant.MINIMAL, OutputFormat.SIMPLE),
        ],
    )
    def test_resolution(self, value, variant, expected):
        config = ProviderConfig.model_validate({"outputFormat": value})
        assert config.resolve_format(variant) == expected

    def test_variant_format_sets(self):
        assert Variant.FULL.formats == {
            OutputFormat.STRUCTURED,
            OutputFormat.COMPACT,
            OutputFormat.JSON,
        }
        assert Variant.MINIMAL.formats == {OutputFormat.SIMPLE, OutputFormat.JSON}


class TestHandshakeResponse:
    """Tests for HandshakeResponse."""

    def test_fixed_values(self):
        assert json.loads(HandshakeResponse().model_dump_json()) == {
            "protocol_version": "1",
            "magic_cookie_key": "DSTREAM_PLUGIN",
            "magic_cookie_value": "dstream-provider-plugin",
        }
