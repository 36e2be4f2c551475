"""
Tests for the config field descriptors

Covers leaf decoders, minimum clamping, the LITERAL/DEFAULT/FAIL/ALL rules
and ordered variant probing.
"""
import pytest

from feedwatch.settings.fields import (
    SELF,
    DecodeError,
    FieldSpec,
    MissingFieldError,
    Rule,
    VariantCase,
    decode_all,
    decode_float,
    decode_str,
    decode_uint,
    enum_decoder,
    parse_struct,
    probe_variants,
)
from feedwatch.settings.model import (
    FEED_IDENT_CASES,
    WEEKDAY_SPIKE_CASES,
    FeedIdent,
    SortOrder,
    Spike,
    SPIKE_FIELDS,
    Weekday,
)


# =============================================================================
# Leaf Decoder Tests
# =============================================================================

class TestLeafDecoders:
    """Tests for numeric, string and enum leaf decoders."""

    def test_float_accepts_int_and_float(self):
        assert decode_float(3) == 3.0
        assert isinstance(decode_float(3), float)
        assert decode_float(0.25) == 0.25

    @pytest.mark.parametrize("node", ["0.3", True, None, [1], {"a": 1}])
    def test_float_rejects_other_tokens(self, node):
        with pytest.raises(DecodeError):
            decode_float(node)

    def test_uint_accepts_integral_values(self):
        assert decode_uint(15) == 15
        assert decode_uint(20.0) == 20
        assert decode_uint(0) == 0

    @pytest.mark.parametrize("node", [-1, 4.5, "15", False, None])
    def test_uint_rejects_invalid(self, node):
        with pytest.raises(DecodeError):
            decode_uint(node)

    def test_str_only_accepts_strings(self):
        assert decode_str("Travis") == "Travis"
        with pytest.raises(DecodeError):
            decode_str(42)

    def test_enum_decoder_matches_value(self):
        decode = enum_decoder(SortOrder)
        assert decode("Ascending") is SortOrder.ASCENDING
        with pytest.raises(DecodeError):
            decode("ascending")


# =============================================================================
# Rule Tests
# =============================================================================

class _Record:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


class TestRules:
    """Tests for parse_struct rule handling."""

    def test_literal_default_when_missing(self):
        fields = (FieldSpec("count", "Count", decode_uint, default=10),)
        record = parse_struct(_Record, fields, {})
        assert record.count == 10

    def test_literal_default_when_unparseable(self):
        fields = (FieldSpec("count", "Count", decode_uint, default=10),)
        record = parse_struct(_Record, fields, {"Count": "lots"})
        assert record.count == 10

    def test_default_rule_uses_factory(self):
        fields = (FieldSpec("spike", "Spike", lambda n: n, rule=Rule.DEFAULT, default_factory=Spike),)
        spec = fields[0]
        assert spec.fallback() == Spike()

    def test_fail_rule_raises(self):
        fields = (FieldSpec("ident", "Ident", decode_str, rule=Rule.FAIL),)
        with pytest.raises(MissingFieldError) as exc_info:
            parse_struct(_Record, fields, {"Other": 1})
        assert exc_info.value.field_name == "ident"

    def test_all_rule_drops_bad_elements(self):
        fields = (FieldSpec("ids", "IDs", decode_uint, rule=Rule.ALL),)
        record = parse_struct(_Record, fields, {"IDs": [1, "two", 3, None, -4]})
        assert record.ids == (1, 3)

    def test_all_rule_missing_is_empty(self):
        fields = (FieldSpec("ids", "IDs", decode_uint, rule=Rule.ALL),)
        assert parse_struct(_Record, fields, {}).ids == ()

    def test_all_rule_non_list_is_empty(self):
        assert decode_all(decode_uint, {"a": 1}, "IDs") == ()

    def test_all_rule_propagates_missing_field(self):
        def decode(node):
            raise MissingFieldError("ident")

        with pytest.raises(MissingFieldError) as exc_info:
            decode_all(decode, [{}], "Feed Settings")
        assert "Feed Settings[0]" in str(exc_info.value)

    def test_first_present_alias_wins(self):
        fields = (FieldSpec("value", ("Primary", "Alias"), decode_uint, default=0),)
        assert parse_struct(_Record, fields, {"Alias": 2}).value == 2
        assert parse_struct(_Record, fields, {"Primary": 1, "Alias": 2}).value == 1

    def test_self_key_decodes_enclosing_node(self):
        fields = (FieldSpec("whole", SELF, lambda node: sorted(node), rule=Rule.FAIL),)
        assert parse_struct(_Record, fields, {"b": 1, "a": 2}).whole == ["a", "b"]

    def test_null_node_reads_as_empty_mapping(self):
        assert parse_struct(Spike, SPIKE_FIELDS, None) == Spike()

    def test_non_mapping_struct_fails(self):
        with pytest.raises(DecodeError):
            parse_struct(Spike, SPIKE_FIELDS, [1, 2])


# =============================================================================
# Minimum Clamp Tests
# =============================================================================

class TestMinimumClamp:
    """Values below a minimum become the minimum; others are unchanged."""

    @pytest.mark.parametrize("raw,expected", [
        (-5, 1.0),
        (0.5, 1.0),
        (1, 1.0),
        (1.5, 1.5),
        (250, 250.0),
    ])
    def test_high_listener_dec_every(self, raw, expected):
        spike = parse_struct(Spike, SPIKE_FIELDS, {"High Listener Decrease Per Listeners": raw})
        assert spike.high_listener_dec_every == expected

    @pytest.mark.parametrize("raw,expected", [(-0.1, 0.0), (0, 0.0), (0.7, 0.7)])
    def test_jump(self, raw, expected):
        spike = parse_struct(Spike, SPIKE_FIELDS, {"Jump Required": raw})
        assert spike.jump == expected


# =============================================================================
# Variant Probing Tests
# =============================================================================

class TestVariantProbing:
    """Tests for ordered tagged-variant decoding."""

    def test_feed_ident_probe_order(self):
        assert [case.key for case in FEED_IDENT_CASES] == ["Name", "ID", "County", "State ID"]

    def test_weekday_probe_order(self):
        assert [case.key for case in WEEKDAY_SPIKE_CASES] == [day.value for day in Weekday]

    def test_first_key_with_valid_value_wins(self):
        # Name is probed first but holds a number, so ID wins
        ident = probe_variants(FEED_IDENT_CASES, {"Name": 5, "ID": 5})
        assert ident == FeedIdent.id(5)

    def test_earlier_case_beats_later(self):
        ident = probe_variants(FEED_IDENT_CASES, {"County": "Travis", "Name": "Austin Fire"})
        assert ident == FeedIdent.name("Austin Fire")

    def test_state_key(self):
        assert probe_variants(FEED_IDENT_CASES, {"State ID": 44}) == FeedIdent.state(44)

    def test_no_matching_key(self):
        with pytest.raises(DecodeError):
            probe_variants(FEED_IDENT_CASES, {"Zip": "78701"})

    def test_non_mapping(self):
        with pytest.raises(DecodeError):
            probe_variants(FEED_IDENT_CASES, "Travis")

    def test_custom_cases(self):
        cases = (
            VariantCase("a", decode_uint, lambda v: ("a", v)),
            VariantCase("b", decode_str, lambda v: ("b", v)),
        )
        assert probe_variants(cases, {"a": "x", "b": "y"}) == ("b", "y")


class TestNonFiniteValues:
    """.nan and .inf never reach a clamped field."""

    @pytest.mark.parametrize("node", [float("nan"), float("inf"), float("-inf")])
    def test_float_rejects_non_finite(self, node):
        with pytest.raises(DecodeError):
            decode_float(node)

    @pytest.mark.parametrize("node", [float("nan"), float("inf")])
    def test_uint_rejects_non_finite(self, node):
        with pytest.raises(DecodeError):
            decode_uint(node)

    @pytest.mark.parametrize("key,attr,expected", [
        ("High Listener Decrease Per Listeners", "high_listener_dec_every", 100.0),
        ("Jump Required", "jump", 0.3),
        ("Low Listener Increase", "low_listener_increase", 0.005),
    ])
    def test_nan_falls_back_to_default(self, key, attr, expected):
        spike = parse_struct(Spike, SPIKE_FIELDS, {key: float("nan")})
        assert getattr(spike, attr) == expected
