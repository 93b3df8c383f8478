import pytest
from app.core.errors import NegativeValue, OutOfRange, ValidationError
from app.schemas.link import FeedArgs
from app.schemas.user import UserCreate
from app.services.validators import (
    MAX_ENTITY_ID,
    parse_args,
    parse_entity_id,
    validate_skip,
    validate_take,
    validate_url
)


class TestValidateTake:

    @pytest.mark.parametrize("take", [1, 2, 30, 49, 50])
    def test_in_range_passes_through(self, take):
        assert validate_take(take) == take

    @pytest.mark.parametrize("take", [-10, -1, 0, 51, 1000])
    def test_out_of_range_fails(self, take):
        with pytest.raises(OutOfRange) as exc_info:
            validate_take(take)
        # l'erreur porte la valeur et les bornes
        assert exc_info.value.value == take
        assert exc_info.value.min_value == 1
        assert exc_info.value.max_value == 50
        assert isinstance(exc_info.value, ValidationError)

    def test_default_is_30(self):
        assert validate_take() == 30
        assert validate_take(None) == 30

    def test_custom_bounds(self):
        assert validate_take(5, min_value=5, max_value=5) == 5
        with pytest.raises(OutOfRange):
            validate_take(6, min_value=5, max_value=5)


class TestValidateSkip:

    @pytest.mark.parametrize("skip", [0, 1, 50, 10_000])
    def test_non_negative_passes_through(self, skip):
        assert validate_skip(skip) == skip

    @pytest.mark.parametrize("skip", [-1, -100])
    def test_negative_fails(self, skip):
        with pytest.raises(NegativeValue) as exc_info:
            validate_skip(skip)
        assert exc_info.value.value == skip
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_default_is_0(self):
        assert validate_skip() == 0


class TestValidateUrl:

    @pytest.mark.parametrize("url", [
        "https://graphql.org",
        "http://localhost:4000/graphql",
        "https://news.ycombinator.com/item?id=1",
    ])
    def test_absolute_urls(self, url):
        assert validate_url(url) is True

    @pytest.mark.parametrize("url", ["not-a-url", "", "/relative/path", "http://"])
    def test_malformed_urls_return_false(self, url):
        # pas d'exception, juste False
        assert validate_url(url) is False


class TestParseEntityId:

    @pytest.mark.parametrize("raw,expected", [("42", 42), ("0", 0), ("007", 7), ("999999", 999999)])
    def test_digit_strings(self, raw, expected):
        assert parse_entity_id(raw) == expected

    @pytest.mark.parametrize("raw", ["12a", "", "-5", "abc", " 4", "4 ", "1.5", "+3"])
    def test_anything_else_is_none(self, raw):
        assert parse_entity_id(raw) is None

    def test_upper_bound_of_integer_column(self):
        assert parse_entity_id(str(MAX_ENTITY_ID)) == MAX_ENTITY_ID
        assert parse_entity_id(str(MAX_ENTITY_ID + 1)) is None

    @pytest.mark.parametrize("raw", ["99999999999999999999", "9" * 5000, "1" + "0" * 4400])
    def test_oversized_ids_are_none(self, raw):
        # pas de ValueError de int(), pas de débordement côté base
        assert parse_entity_id(raw) is None

    def test_leading_zeros_do_not_count(self):
        assert parse_entity_id("0" * 5000 + "42") == 42
        assert parse_entity_id("0" * 5000) == 0


class TestParseArgs:

    def test_builds_model(self):
        args = parse_args(FeedArgs, filter_needle="graphql", skip=None, take=10)
        assert args.filter_needle == "graphql"
        assert args.take == 10

    def test_pydantic_error_becomes_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_args(UserCreate, email="not-an-email", password="x", name="Bob")
        assert "email" in exc_info.value.message
