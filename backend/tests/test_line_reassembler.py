"""
Tests for reassembling wrapped lines of the IDN text export
"""
import pytest
from idn_parser import is_continuation_line, join_continuation, reassemble_lines


class TestIsContinuationLine:
    """The wrap predicate on its own"""

    @pytest.mark.parametrize("line", [
        "Foo,",
        "Foo,   ",
        "Brain Instruction Freq. (7.83, 14.1,",
        "Something Brain Instruction",
        "Something Brain Instruction Freq.",
        "Brain Instruction Freq.\t",
    ])
    def test_wrapped_lines(self, line):
        assert is_continuation_line(line) is True

    @pytest.mark.parametrize("line", [
        "Foo",
        "",
        "Real Instruction Freq. (1, 2)",
        "Brain Instruction Freq. (1, 2)",
        "Scantype: 3",
        ",Foo",
    ])
    def test_complete_lines(self, line):
        assert is_continuation_line(line) is False


class TestJoinContinuation:
    """Joining a wrapped line with its remainder"""

    def test_trailing_comma_outside_list_is_dropped(self):
        assert join_continuation("Foo,", "Bar") == "FooBar"

    def test_trailing_comma_inside_open_list_is_kept(self):
        joined = join_continuation("Real Instruction Freq. (1.5, 2.5,", "  3.5)")
        assert joined == "Real Instruction Freq. (1.5, 2.5,3.5)"

    def test_label_wrap_joins_without_separator(self):
        assert join_continuation("Brain Instruction  ", "  Freq. (1)") == "Brain InstructionFreq. (1)"

    def test_comma_after_closed_list_is_dropped(self):
        assert join_continuation("(1, 2),", "next") == "(1, 2)next"


class TestReassembleLines:
    """Merging physical lines into logical lines"""

    def test_trailing_comma_merges_next_line(self):
        assert reassemble_lines(["Foo,", "Bar"]) == ["FooBar"]

    def test_unwrapped_lines_unchanged(self):
        assert reassemble_lines(["Foo", "Bar"]) == ["Foo", "Bar"]

    def test_empty_input(self):
        assert reassemble_lines([]) == []

    def test_wrap_after_label_then_after_comma_merges_three_lines(self):
        lines = [
            "Brain Instruction Freq.",
            "(7.83, 14.1,",
            "22.5)",
            "Scantype: 3",
        ]
        assert reassemble_lines(lines) == [
            "Brain Instruction Freq.(7.83, 14.1,22.5)",
            "Scantype: 3",
        ]

    def test_at_most_two_merges_per_line(self):
        lines = ["(1,", "2,", "3,", "4)"]
        result = reassemble_lines(lines)
        assert result == ["(1,2,3,", "4)"]

    def test_second_merge_only_when_merged_line_ends_with_comma(self):
        lines = ["Brain Instruction", "Freq. (1, 2)", "Next line"]
        assert reassemble_lines(lines) == ["Brain InstructionFreq. (1, 2)", "Next line"]

    def test_wrap_marker_on_last_line_kept_as_is(self):
        assert reassemble_lines(["Foo", "Bar,"]) == ["Foo", "Bar,"]

    def test_second_merge_missing_successor_does_not_raise(self):
        assert reassemble_lines(["(1,", "2,"]) == ["(1,2,"]

    def test_line_after_merge_is_not_skipped(self):
        lines = ["A,", "B", "C", "D"]
        assert reassemble_lines(lines) == ["AB", "C", "D"]

    def test_consecutive_wrapped_records(self):
        lines = ["A,", "B", "C,", "D"]
        assert reassemble_lines(lines) == ["AB", "CD"]
