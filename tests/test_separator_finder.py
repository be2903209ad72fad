"""Tests for separator candidate search."""

import pytest

from mboxscan.services.mbox_scanner.separator_finder import (
    Separator,
    SeparatorFinder,
    find_separator,
    has_year_suffix,
)


class TestHasYearSuffix:
    """Test the year heuristic on separator lines."""

    @pytest.mark.parametrize(
        "line",
        [
            b"From herp.derp at example.com  Thu Jan  1 00:00:01 2015",
            b"From one place.  2014",
            b"From someone Mon Jan  1 00:00:00 1999",
            b"From x 1000",
            b"From x 2999\r",
        ],
    )
    def test_accepts_year_suffix(self, line):
        """Test lines ending in a plausible year are accepted."""
        assert has_year_suffix(line, 0, len(line))

    @pytest.mark.parametrize(
        "line",
        [
            b"From Herp Derp with love.",
            b"From x 3015",
            b"From x 0999",
            b"From x 20a5",
            b"From 2015",
        ],
    )
    def test_rejects_other_suffixes(self, line):
        """Test lines without a 1xxx/2xxx suffix are rejected."""
        assert not has_year_suffix(line, 0, len(line))


class TestFindSeparator:
    """Test one-shot separator search."""

    def test_separator_at_buffer_start(self):
        """Test a separator on the first line."""
        data = b"From a 2015\nSubject: x\n"
        assert find_separator(data) == Separator(0, 11)

    def test_separator_after_line_break(self):
        """Test a separator following a line break."""
        data = b"body\nFrom a 2015\n"
        assert find_separator(data) == Separator(5, 16)

    def test_skips_rejected_lines(self):
        """Test lines without a year suffix are skipped."""
        data = b"From Herp Derp with love.\nFrom a 2015\n"
        assert find_separator(data) == Separator(26, 37)

    def test_ignores_from_inside_line(self):
        """Test "From " that does not start a line is ignored."""
        data = b">From a 2015\nquoted From b 2015\n"
        assert find_separator(data) is None

    def test_incomplete_line_is_not_reported(self):
        """Test a separator line without its line break is not reported yet."""
        assert find_separator(b"From a 2015") is None

    def test_search_from_offset(self):
        """Test searching from a later line start."""
        data = b"From a 2015\nx\nFrom b 2016\n"
        assert find_separator(data, 12) == Separator(14, 25)


class TestSeparatorFinder:
    """Test resumable separator search over a growing window."""

    @pytest.fixture
    def finder(self):
        """Create a SeparatorFinder instance."""
        return SeparatorFinder()

    def test_scan_collects_all_candidates(self, finder):
        """Test all candidates in a window are collected in order."""
        data = b"From a 2015\nx\n\nFrom b 2016\ny\n"
        assert finder.scan(data) == [Separator(0, 11), Separator(15, 26)]

    def test_scan_resumes_without_duplicates(self, finder):
        """Test rescanning a grown window keeps earlier candidates once."""
        data = b"From a 2015\nx\n\nFrom b 20"
        assert finder.scan(data) == [Separator(0, 11)]

        data += b"16\ny\n"
        assert finder.scan(data) == [Separator(0, 11), Separator(15, 26)]

    def test_scan_handles_split_prefix(self, finder):
        """Test a "From " prefix split across windows is found."""
        data = b"From a 2015\nbody\nFr"
        finder.scan(data)
        assert finder.resume == 17

        data += b"om b 2016\n"
        assert finder.scan(data)[-1] == Separator(17, 28)

    def test_scan_does_not_reexamine_rejected_lines(self, finder):
        """Test the resume offset moves past conclusively rejected lines."""
        data = b"From Herp Derp with love.\nplain\n"
        assert finder.scan(data) == []
        assert finder.resume == len(data)

    def test_rebase_drops_consumed_candidates(self, finder):
        """Test rebasing shifts offsets and forgets consumed candidates."""
        data = b"From a 2015\nx\nFrom b 2016\ny\n"
        finder.scan(data)

        finder.rebase(14)

        assert finder.candidates == [Separator(0, 11)]
        assert finder.resume == len(data) - 14

    def test_discard_removes_candidate(self, finder):
        """Test discarding a refuted candidate."""
        data = b"From a 2015\nFrom b 2016\n"
        finder.scan(data)

        finder.discard(Separator(12, 23))

        assert finder.candidates == [Separator(0, 11)]
