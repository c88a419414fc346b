"""Tests for cross-statement validation"""

import pytest

from unipen import parse_string
from unipen.config import ParserSettings
from unipen.errors import UniPenValidationError
from unipen.utils.unipen_validator import UniPenValidator


def parse(content, **settings):
    return parse_string(content, settings=ParserSettings(**settings))


def reasons(exc_info):
    return [issue.reason for issue in exc_info.value.issues]


PEN_DATA = ".COORD X Y\n.PEN_DOWN\n1 2\n3 4\n.PEN_UP\n5 6\n"


class TestComponentReferences:
    """Indices, range direction and existing components"""

    def test_fractional_index(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".SEGMENT WORD 1.5")
        assert reasons(exc_info) == ["component index 1.5 is not a non-negative integer"]

    def test_negative_point(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".SEGMENT WORD 1:-2")
        assert "point index -2" in reasons(exc_info)[0]

    def test_negative_index_in_set(self):
        with pytest.raises(UniPenValidationError):
            parse(".TRAINING_SET f s WORD -1")

    def test_inverted_range_warns(self):
        doc = parse(PEN_DATA + ".SEGMENT WORD 1-0")
        assert any("inverted range 1-0" in w for w in doc.warnings)

    def test_inverted_range_strict(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(PEN_DATA + ".SEGMENT WORD 1-0", strict_ranges=True)
        assert reasons(exc_info) == ["inverted range 1-0"]

    def test_reference_past_last_component(self):
        doc = parse(PEN_DATA + ".SEGMENT WORD 0-3")
        assert any("component 3 does not exist" in w for w in doc.warnings)

    def test_reference_past_last_component_strict(self):
        with pytest.raises(UniPenValidationError):
            parse(PEN_DATA + ".REC_TIME WORD 5 10", strict_component_refs=True)

    def test_point_past_last_sample(self):
        doc = parse(PEN_DATA + ".SEGMENT WORD 1:3")
        assert any("point 1:3 does not exist" in w for w in doc.warnings)

    def test_references_follow_current_set(self):
        """Numbering restarts at .START_SET"""
        content = PEN_DATA + ".START_SET second\n.PEN_DOWN\n9 9\n.SEGMENT WORD 1"
        doc = parse(content)
        assert any("component 1 does not exist" in w for w in doc.warnings)

    def test_repeated_set_name_restarts_numbering(self):
        """A second .START_SET with a used name does not continue the first one"""
        content = (
            ".COORD X Y\n"
            ".START_SET s\n.PEN_DOWN\n1 2\n.PEN_UP\n3 4\n"
            ".START_SET t\n.PEN_DOWN\n1 1\n"
            ".START_SET s\n.PEN_DOWN\n5 6\n"
            ".SEGMENT WORD 1"
        )
        doc = parse(content)
        assert any("component 1 does not exist" in w for w in doc.warnings)

    def test_earlier_occurrence_checked_against_its_own_data(self):
        """Components of a later set with the same name are not counted"""
        content = (
            ".COORD X Y\n.START_SET s\n.PEN_DOWN\n1 2\n.SEGMENT WORD 1\n"
            ".START_SET s\n.PEN_DOWN\n3 4\n.PEN_UP\n5 6\n"
        )
        assert any("component 1 does not exist" in w for w in parse(content).warnings)

    def test_no_pen_data_no_existence_check(self):
        assert parse(".SEGMENT WORD 0-40").warnings == ()

    def test_warning_carries_location(self):
        doc = parse(PEN_DATA + ".SEGMENT WORD 0-3")
        assert doc.warnings[0].startswith("<string>:7:1: ")


class TestFrequencyTables:
    def test_matching_lengths(self):
        assert len(parse(".ALPHABET a b c\n.ALPHABET_FREQ 1 2 3")) == 2

    def test_length_mismatch(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".ALPHABET a b c\n.ALPHABET_FREQ 1 2")
        assert reasons(exc_info) == [".ALPHABET_FREQ has 2 entries but .ALPHABET has 3"]

    def test_nearest_preceding_table(self):
        parse(".LEXICON a\n.LEXICON a b\n.LEXICON_FREQ 1 2")

    def test_following_table(self):
        parse(".LEXICON_FREQ 5 6\n.LEXICON hello world")

    def test_missing_table_warns(self):
        doc = parse(".ALPHABET_FREQ 1 2")
        assert doc.warnings == ("<string>:1:1: .ALPHABET_FREQ without a .ALPHABET table",)


class TestCustomKeywords:
    def test_undeclared_with_suggestion(self):
        """A near miss of a built-in keyword suggests it"""
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".SEGMNT WORD 0")
        assert reasons(exc_info) == ["undeclared keyword .SEGMNT (did you mean .SEGMENT?)"]
        assert str(exc_info.value).startswith("<string>:1:1: undeclared keyword")

    def test_undeclared_without_suggestion(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".XYZZY_PLUGH hello")
        assert reasons(exc_info) == ["undeclared keyword .XYZZY_PLUGH"]

    def test_forward_use(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".SPEED 3\n.KEYWORD .SPEED N")
        assert "used before its .KEYWORD declaration" in reasons(exc_info)[0]

    def test_all_errors_reported(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".FOO x\n.BAR y")
        assert len(exc_info.value.issues) == 2
        assert "UniPen validation errors (2)" in str(exc_info.value)


class TestCoordinates:
    def test_repeated_axis(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".COORD X Y X")
        assert reasons(exc_info) == [".COORD repeats axis X"]

    def test_missing_y_warns(self):
        doc = parse(".COORD X T")
        assert doc.warnings == ("<string>:1:1: .COORD does not declare Y",)

    def test_sample_arity(self):
        with pytest.raises(UniPenValidationError) as exc_info:
            parse(".COORD X Y T\n.PEN_DOWN\n1 2 3\n4 5\n")
        assert reasons(exc_info) == ["sample 2 has 2 values, .COORD declares 3 (X Y T)"]

    def test_pen_data_without_coord_warns(self):
        doc = parse(".PEN_DOWN\n1 2 3\n.PEN_UP\n4\n")
        assert doc.warnings == ("<string>:1:1: pen data before any .COORD declaration",)

    def test_latest_coord_applies(self):
        parse(".COORD X Y\n.PEN_DOWN\n1 2\n.COORD X Y T\n.PEN_DOWN\n1 2 3\n")


class TestAdvisoryChecks:
    def test_segment_level_not_in_hierarchy(self):
        doc = parse(".HIERARCHY PAGE WORD\n.SEGMENT LINE 0")
        assert doc.warnings == ("<string>:2:1: segment level 'LINE' is not declared in .HIERARCHY",)

    def test_bad_date(self):
        doc = parse(".DATE 13 32 1995")
        assert len(doc.warnings) == 2

    def test_partially_unknown_date(self):
        assert parse(".DATE ? 12 ?").warnings == ()


class TestKeywordSuggestions:
    """Levenshtein helper used for typo suggestions"""

    def test_distance(self):
        assert UniPenValidator.levenshtein_distance(".SEGMNT", ".SEGMENT") == 1
        assert UniPenValidator.levenshtein_distance(".PEN_DWON", ".PEN_DOWN") == 2
        assert UniPenValidator.levenshtein_distance("", "abc") == 3

    def test_validate_keyword(self):
        known = {".SEGMENT", ".PEN_DOWN"}
        assert UniPenValidator.validate_keyword(".SEGMENT", known) == (True, None)
        assert UniPenValidator.validate_keyword(".SEGMNT", known) == (False, ".SEGMENT")
        assert UniPenValidator.validate_keyword(".XYZZY", known) == (True, None)
