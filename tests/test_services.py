import pytest

from string_analyzer import crud, models
from string_analyzer.analyzer import compute_properties
from string_analyzer.exceptions import (
    ConflictingFiltersError,
    StringAlreadyExistsError,
    StringNotFoundError,
)
from string_analyzer.schemas import FilterSet
from string_analyzer.services import (
    create_string,
    delete_string_by_value,
    get_all_strings_with_filters,
    get_string_by_value,
    get_strings_by_natural_language,
)


class TestCreateString:
    def test_create_new_string(self, db_session):
        record = create_string(db_session, "test string")
        assert record.value == "test string"
        assert record.id == record.properties.sha256_hash
        assert record.created_at.tzinfo is not None
        assert db_session.query(models.StoredString).count() == 1

    def test_duplicate_raises_error(self, db_session):
        create_string(db_session, "test string")
        with pytest.raises(StringAlreadyExistsError, match="already exists"):
            create_string(db_session, "test string")

    def test_unique_constraint_reported_as_conflict(self, db_session):
        # Bypass the pre-check to hit the database constraint directly
        crud.create_string(db_session, "raced", compute_properties("raced"))
        with pytest.raises(StringAlreadyExistsError):
            crud.create_string(db_session, "raced", compute_properties("raced"))
        assert db_session.query(models.StoredString).count() == 1

    def test_exact_duplicates_conflict_only(self, db_session):
        create_string(db_session, "Test String")
        create_string(db_session, "test string")


class TestLookupAndDelete:
    def test_get_by_value(self, db_session):
        created = create_string(db_session, "findme")
        assert get_string_by_value(db_session, "findme") == created

    def test_get_missing(self, db_session):
        with pytest.raises(StringNotFoundError):
            get_string_by_value(db_session, "ghost")

    def test_delete(self, db_session):
        create_string(db_session, "gone")
        delete_string_by_value(db_session, "gone")
        with pytest.raises(StringNotFoundError):
            delete_string_by_value(db_session, "gone")


class TestQueries:
    @pytest.fixture(autouse=True)
    def _seed(self, db_session):
        for v in ["a", "racecar", "hello world", "level"]:
            create_string(db_session, v)

    def test_structured_filters(self, db_session):
        result = get_all_strings_with_filters(db_session, FilterSet(is_palindrome=True))
        assert [r.value for r in result["data"]] == ["a", "racecar", "level"]
        assert result["count"] == 3
        assert result["filters_applied"] == {"is_palindrome": True}

    def test_natural_language(self, db_session):
        result = get_strings_by_natural_language(db_session, "palindromes longer than 4")
        assert [r.value for r in result["data"]] == ["racecar", "level"]
        assert result["interpreted_query"]["parsed_filters"] == {"is_palindrome": True, "min_length": 5}

    def test_natural_language_conflict(self, db_session):
        with pytest.raises(ConflictingFiltersError):
            get_strings_by_natural_language(db_session, "strings longer than 10 and shorter than 5")
