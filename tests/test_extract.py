import json

import pytest

from conftest import as_reply, profile_dict
from leads.extract import extract_json_array, parse_profiles


@pytest.fixture
def raw_array():
    return as_reply(
        profile_dict("joao_tattoo", whatsapp="https://wa.me/5511987654321"),
        profile_dict("maria.ink"),
    )


class TestExtractJsonArray:
    """Test best-effort array extraction from model text."""

    def test_plain_array(self, raw_array):
        """Test a bare JSON array parses as is."""
        assert extract_json_array(raw_array) == json.loads(raw_array)

    def test_fenced_matches_unfenced(self, raw_array):
        """Test markdown fencing does not change the extracted array."""
        fenced = f"```json\n{raw_array}\n```"
        assert extract_json_array(fenced) == extract_json_array(raw_array)

    def test_bare_fence(self, raw_array):
        """Test fences without a language tag are also stripped."""
        assert extract_json_array(f"```\n{raw_array}\n```") == json.loads(raw_array)

    def test_preamble_and_trailer_ignored(self, raw_array):
        """Test chatter around the array is cut away."""
        text = f"Aqui estão os perfis encontrados:\n{raw_array}\nEspero ter ajudado!"
        assert extract_json_array(text) == json.loads(raw_array)

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_text(self, text):
        """Test empty replies yield None."""
        assert extract_json_array(text) is None

    def test_malformed_json(self):
        """Test broken JSON yields None instead of raising."""
        assert extract_json_array('[{"name": "Joao", "username": ]') is None

    def test_non_array_json(self):
        """Test a JSON object without brackets is not accepted as an array."""
        assert extract_json_array('{"name": "Joao"}') is None

    def test_no_brackets(self):
        """Test prose without any array yields None."""
        assert extract_json_array("Não encontrei perfis para essa busca.") is None


class TestParseProfiles:
    """Test conversion of extracted items into profiles."""

    def test_valid_profiles(self, raw_array):
        """Test complete items become Profile objects."""
        profiles = parse_profiles(raw_array)

        assert [p.username for p in profiles] == ["joao_tattoo", "maria.ink"]
        assert profiles[0].whatsapp == "https://wa.me/5511987654321"
        assert profiles[1].whatsapp is None

    @pytest.mark.parametrize("missing", ["name", "username", "instagram_url"])
    def test_missing_required_field_dropped(self, missing):
        """Test items without name, username or URL are dropped."""
        broken = profile_dict("broken_one")
        broken[missing] = None
        text = as_reply(broken, profile_dict("kept_one"))

        assert [p.username for p in parse_profiles(text)] == ["kept_one"]

    @pytest.mark.parametrize("blank", ["", "   "])
    @pytest.mark.parametrize("field", ["name", "instagram_url"])
    def test_blank_required_field_dropped(self, field, blank):
        """Test empty or whitespace-only strings count as missing."""
        broken = profile_dict("broken_one")
        broken[field] = blank
        text = as_reply(broken, profile_dict("kept_one"))
        assert [p.username for p in parse_profiles(text)] == ["kept_one"]

    def test_non_dict_items_dropped(self):
        """Test stray strings and numbers in the array are ignored."""
        text = json.dumps(["joao_tattoo", 42, profile_dict("kept_one")])
        assert [p.username for p in parse_profiles(text)] == ["kept_one"]

    def test_values_coerced(self):
        """Test numeric followers and 'null' strings are normalised."""
        text = as_reply(profile_dict("kept_one", followers=15000, profile_pic="null", bio=None))

        profile = parse_profiles(text)[0]

        assert profile.followers == "15000"
        assert profile.profile_pic is None
        assert profile.bio == ""

    def test_unparseable_text(self):
        """Test garbage text yields no profiles."""
        assert parse_profiles("```json\n[oops\n```") == []


class TestHostileReplies:
    """Test replies that break json.loads in ways other than syntax errors."""

    def test_deeply_nested_array(self):
        """Test an absurdly nested array yields None instead of RecursionError."""
        assert extract_json_array("[" * 100000 + "]" * 100000) is None

    def test_oversized_integer(self):
        """Test an integer beyond the int-conversion limit does not raise."""
        text = '[{"followers": 1' + "0" * 5000 + "}]"
        assert parse_profiles(text) == []
