"""Unit tests for claim extraction."""

from nomen.domain.service.claims import extract_attribute, extract_attributes
from nomen.domain.value import AttributeKey


class TestExtractAttribute:
    """Tests for extract_attribute()."""

    def test_full_name_beats_name(self):
        """Should prefer full_name over name for the display name."""
        claims = {"name": "ada", "full_name": "Ada Lovelace"}

        assert extract_attribute(claims, AttributeKey.DISPLAY_NAME) == "Ada Lovelace"

    def test_falls_back_to_later_claim(self):
        """Should use the next claim name when earlier ones are absent."""
        claims = {"picture": "https://img.example.com/ada.png"}

        assert (
            extract_attribute(claims, AttributeKey.AVATAR_URL)
            == "https://img.example.com/ada.png"
        )

    def test_blank_claim_is_absent(self):
        """Should skip blank and null values and keep looking."""
        claims = {"full_name": "   ", "name": None, "display_name": "Ada"}

        assert extract_attribute(claims, AttributeKey.DISPLAY_NAME) == "Ada"

    def test_value_is_trimmed(self):
        """Should strip surrounding whitespace."""
        claims = {"email": "  ada@example.com "}

        assert extract_attribute(claims, AttributeKey.PRIMARY_EMAIL) == "ada@example.com"

    def test_missing_returns_none(self):
        """Should return None when no candidate claim is present."""
        assert extract_attribute({}, AttributeKey.USERNAME) is None


class TestExtractAttributes:
    """Tests for extract_attributes()."""

    def test_extracts_every_present_key(self):
        """Should map each attribute key with a present claim."""
        claims = {
            "name": "Ada",
            "email": "ada@example.com",
            "preferred_username": "ada",
            "avatar_url": "https://img.example.com/ada.png",
            "email_verified": True,
        }

        extracted = extract_attributes(claims)

        assert extracted == {
            AttributeKey.DISPLAY_NAME: "Ada",
            AttributeKey.PRIMARY_EMAIL: "ada@example.com",
            AttributeKey.USERNAME: "ada",
            AttributeKey.AVATAR_URL: "https://img.example.com/ada.png",
        }

    def test_absent_keys_are_left_out(self):
        """Should not emit keys whose claims are missing."""
        extracted = extract_attributes({"email": "ada@example.com"})

        assert list(extracted) == [AttributeKey.PRIMARY_EMAIL]

    def test_empty_claims(self):
        """Should return an empty mapping for empty claims."""
        assert extract_attributes({}) == {}
