"""Tests for CADD score lookup and annotation."""

import gzip
from unittest.mock import Mock

import pysam
import pytest

from genannot.annotators.cadd import CaddAnnotator
from genannot.constants import (
    ALTERNATE_ALLELES,
    CADD_ABS,
    CADD_SCALED,
    CHROMOSOME,
    MISSING_ATTRIBUTE_REASON,
    POSITION,
    REFERENCE_ALLELE,
    WRONG_DATATYPE_REASON,
)
from genannot.exceptions import FormatError
from genannot.models.schema import FieldType
from genannot.scores import AlleleScoreMatcher
from genannot.scores.table import (
    InMemoryScoreTable,
    TabixScoreTable,
    open_score_table,
    parse_score_line,
)


def variant(chromosome, position, ref, alt):
    return {CHROMOSOME: chromosome, POSITION: position, REFERENCE_ALLELE: ref, ALTERNATE_ALLELES: alt}


@pytest.fixture
def tabix_path(cadd_tsv):
    """The CADD fixture bgzipped and tabix indexed."""
    return pysam.tabix_index(str(cadd_tsv), seq_col=0, start_col=1, end_col=1, force=True)


class TestAlleleScoreMatcher:
    """Tests for splitting and rejoining multi-allelic lookups."""

    def test_single_allele_match(self, score_table):
        matcher = AlleleScoreMatcher(score_table)
        assert matcher.match("1", 100, "C", "T") == ("-0.03", "2.003")

    def test_no_allele_matches(self, score_table):
        matcher = AlleleScoreMatcher(score_table)
        assert matcher.match("2", 200, "A", "C") == (None, None)

    def test_all_alleles_match_in_input_order(self, score_table):
        matcher = AlleleScoreMatcher(score_table)
        assert matcher.match("3", 300, "G", "T,A,C") == ("-2.4,0.2,0.5", "0.123,23.1,14.5")

    def test_partial_match_skips_missing_alleles(self, score_table):
        """Test that unmatched alleles are left out of the joined values."""
        matcher = AlleleScoreMatcher(score_table)
        assert matcher.match("3", 300, "G", "T,X,C") == ("-2.4,0.5", "0.123,14.5")

    def test_multi_base_reference(self, score_table):
        matcher = AlleleScoreMatcher(score_table)
        assert matcher.match("3", 300, "GC", "T,A") == ("-3.4,1.2", "1.123,24.1")

    def test_multi_base_alternates(self, score_table):
        matcher = AlleleScoreMatcher(score_table)
        assert matcher.match("3", 300, "C", "GX,GC") == ("-1.002,1.5", "3.3,15.5")
        assert matcher.match("3", 300, "C", "GC") == ("1.5", "15.5")

    def test_lookup_is_exact(self, score_table):
        """Test that neighbouring positions and other references never match."""
        matcher = AlleleScoreMatcher(score_table)

        assert matcher.match("3", 301, "G", "T") == (None, None)
        assert matcher.match("3", 300, "A", "T") == (None, None)
        assert matcher.match("4", 300, "G", "T") == (None, None)

    def test_lookup_alleles_keeps_positions(self, score_table):
        matcher = AlleleScoreMatcher(score_table)
        scores = matcher.lookup_alleles("3", 300, "G", "T,X,C")

        assert scores[1] is None
        assert [score.alternate_allele for score in scores if score] == ["T", "C"]


class TestScoreTables:
    """Tests for the score table backends."""

    def test_parse_score_line(self):
        score = parse_score_line("3\t300\tG\tT\t-2.4\t0.123\n")

        assert score.key() == ("3", 300, "G", "T")
        assert score.absolute_score == "-2.4"
        assert score.scaled_score == "0.123"

    def test_parse_score_line_too_short(self):
        with pytest.raises(FormatError):
            parse_score_line("3\t300\tG\tT", 7)

    def test_from_tsv_skips_headers(self, cadd_tsv, cadd_rows):
        table = InMemoryScoreTable.from_tsv(cadd_tsv)

        assert len(table) == len(cadd_rows)
        assert table.lookup("2", 200, "A", "T").scaled_score == "5.3"

    def test_from_gzipped_tsv(self, tmp_path, cadd_tsv):
        path = tmp_path / "cadd.tsv.gz"
        with gzip.open(path, "wt") as f:
            f.write(cadd_tsv.read_text())

        assert InMemoryScoreTable.from_tsv(path).lookup("1", 100, "C", "T").absolute_score == "-0.03"

    def test_from_tsv_bad_position(self, tmp_path):
        path = tmp_path / "bad.tsv"
        path.write_text("#Chrom\tPos\tRef\tAlt\tRawScore\tPHRED\n1\tabc\tC\tT\t0.1\t1.0\n")

        with pytest.raises(FormatError) as exc_info:
            InMemoryScoreTable.from_tsv(path)

        assert exc_info.value.line_number == 2

    def test_tabix_lookup(self, tabix_path):
        table = TabixScoreTable(tabix_path)
        try:
            assert table.lookup("3", 300, "G", "C").absolute_score == "0.5"
            assert table.lookup("3", 300, "G", "X") is None
            assert table.lookup("3", 299, "G", "C") is None
            assert table.lookup("MT", 300, "G", "C") is None
        finally:
            table.close()

    def test_tabix_lookup_position_zero(self, tabix_path):
        """Test that a position before the first base has no score."""
        table = TabixScoreTable(tabix_path)
        try:
            assert table.lookup("1", 0, "C", "T") is None
        finally:
            table.close()

    def test_annotate_position_zero_with_tabix_file(self, tabix_path):
        annotator = CaddAnnotator.from_path(tabix_path)
        try:
            result = annotator.annotate(variant("1", 0, "C", "T"))[0]
        finally:
            annotator.close()

        assert CADD_ABS not in result

    def test_tabix_closed_table(self, tabix_path):
        table = TabixScoreTable(tabix_path)
        table.close()
        table.close()

        with pytest.raises(ValueError, match="closed"):
            table.lookup("1", 100, "C", "T")

    def test_open_indexed_score_table(self, tabix_path):
        indexed = open_score_table(tabix_path)
        try:
            assert isinstance(indexed, TabixScoreTable)
        finally:
            indexed.close()

    def test_open_plain_score_table(self, cadd_tsv):
        assert isinstance(open_score_table(cadd_tsv), InMemoryScoreTable)


class TestCaddAnnotator:
    """Tests for the CADD annotator."""

    def test_annotate_single_match(self, score_table):
        annotator = CaddAnnotator(score_table)
        results = annotator.annotate(variant("1", 100, "C", "T"))

        assert len(results) == 1
        assert results[0][CADD_ABS] == "-0.03"
        assert results[0][CADD_SCALED] == "2.003"
        assert results[0][REFERENCE_ALLELE] == "C"

    def test_annotate_no_match_has_no_score_fields(self, score_table):
        results = CaddAnnotator(score_table).annotate(variant("2", 200, "A", "C"))

        assert len(results) == 1
        assert CADD_ABS not in results[0]
        assert CADD_SCALED not in results[0]

    def test_annotate_multi_allelic(self, score_table):
        result = CaddAnnotator(score_table).annotate(variant("3", 300, "G", "T,A,C"))[0]

        assert result[CADD_ABS] == "-2.4,0.2,0.5"
        assert result[CADD_SCALED] == "0.123,23.1,14.5"

    def test_input_record_not_modified(self, score_table):
        original = variant("3", 300, "G", "T")
        snapshot = dict(original)

        result = CaddAnnotator(score_table).annotate(original)[0]

        assert original == snapshot
        assert result is not original

    def test_annotate_with_tabix_file(self, tabix_path):
        annotator = CaddAnnotator.from_path(tabix_path)
        try:
            result = annotator.annotate(variant("3", 300, "GC", "T,A"))[0]
        finally:
            annotator.close()

        assert result[CADD_ABS] == "-3.4,1.2"
        assert result[CADD_SCALED] == "1.123,24.1"

    def test_annotate_logs_outcome(self, score_table):
        run_logger = Mock()
        annotator = CaddAnnotator(score_table, run_logger=run_logger)

        annotator.annotate(variant("2", 200, "A", "C"))

        run_logger.log_annotation.assert_called_once_with("CADD", "2:200", 0)

    def test_output_fields(self, score_table):
        assert CaddAnnotator(score_table).output_fields() == [
            (CADD_ABS, FieldType.STRING),
            (CADD_SCALED, FieldType.STRING),
        ]

    def test_can_annotate(self, score_table):
        schema = {
            CHROMOSOME: FieldType.STRING,
            POSITION: FieldType.LONG,
            REFERENCE_ALLELE: FieldType.TEXT,
            ALTERNATE_ALLELES: FieldType.TEXT,
        }
        assert CaddAnnotator(score_table).can_annotate(schema) is True

    def test_can_annotate_wrong_datatype(self, score_table):
        schema = {
            CHROMOSOME: FieldType.LONG,
            POSITION: FieldType.LONG,
            REFERENCE_ALLELE: FieldType.STRING,
            ALTERNATE_ALLELES: FieldType.STRING,
        }
        assert CaddAnnotator(score_table).can_annotate(schema) == WRONG_DATATYPE_REASON

    def test_can_annotate_missing_alleles(self, score_table):
        schema = {CHROMOSOME: FieldType.STRING, POSITION: FieldType.LONG}
        assert CaddAnnotator(score_table).can_annotate(schema) == MISSING_ATTRIBUTE_REASON
