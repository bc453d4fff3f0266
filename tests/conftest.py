"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def gene_location_lines():
    """Sample HGNC gene location table (GRCh37)."""
    return [
        "HGNC symbol\tGene Start (bp)\tGene End (bp)\tChromosome Name",
        "OVLP\t155640000\t155700000\t3",
        "GMPS\t155587772\t155651835\t3",
        "PEX14\t10533118\t10690813\t1",
        "KRAS\t25357723\t25403870\t12",
        "BRCA1\t41196312\t41277500\t17",
        "XGENE\t5000\t6000\tX",
        "YGENE\t1000\t2000\tY",
        "PATCHED\t100\t200\tHG1_PATCH",
    ]


@pytest.fixture
def hpo_lines():
    """Sample HPO diseases-to-genes-to-phenotypes table."""
    return [
        "#Format: diseaseId<tab>gene-symbol<tab>gene-id<tab>HPO-ID<tab>HPO-term-name",
        "OMIM:614887\tPEX14\t5195\tHP:0002240\tHepatomegaly",
        "OMIM:614887\tPEX14\t5195\tHP:0001250\tSeizures",
        "ORPHA:912\tPEX14\t5195\tHP:0001250\tSeizures",
        "OMIM:601626\tGMPS\t8833\tHP:0001903\tAnemia",
        "OMIM:164790\tKRAS\t3845\tHP:0002664\tNeoplasm",
    ]


@pytest.fixture
def omim_lines():
    """Sample OMIM morbid map, including an entry without a phenotype MIM number."""
    return [
        "Leukemia, acute myelogenous, 601626 (3)|GMPS|600358|3q25.31",
        "Leukemia, acute myelogenous (3)|KRAS, KRAS2, RASK2, NS, CFC2|190070|12p12.1",
        "Peroxisome biogenesis disorder 13A (Zellweger), 614887 (3)|PEX14, PBD13A|601791|1p36.22",
        "Breast-ovarian cancer, familial, 1, 604370 (3)|BRCA1, PSCP|113705|17q21.31",
        "{Leukemia, susceptibility to}, 613065 (2)|GMPS|600358|3q25.31",
    ]


@pytest.fixture
def cadd_rows():
    """CADD rows as (chrom, pos, ref, alt, raw, phred)."""
    return [
        ("1", 100, "C", "T", "-0.03", "2.003"),
        ("2", 200, "A", "G", "0.11", "5.2"),
        ("2", 200, "A", "T", "0.12", "5.3"),
        ("3", 300, "C", "GC", "1.5", "15.5"),
        ("3", 300, "C", "GX", "-1.002", "3.3"),
        ("3", 300, "G", "A", "0.2", "23.1"),
        ("3", 300, "G", "C", "0.5", "14.5"),
        ("3", 300, "G", "T", "-2.4", "0.123"),
        ("3", 300, "GC", "A", "1.2", "24.1"),
        ("3", 300, "GC", "T", "-3.4", "1.123"),
    ]


@pytest.fixture
def cadd_tsv(tmp_path, cadd_rows):
    """CADD rows written as a plain TSV file with the CADD header."""
    path = tmp_path / "cadd_test.tsv"
    lines = [
        "## CADD GRCh37-v1.6 (c) University of Washington and Hudson-Alpha Institute",
        "#Chrom\tPos\tRef\tAlt\tRawScore\tPHRED",
    ]
    lines += ["\t".join(str(value) for value in row) for row in cadd_rows]
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def score_table(cadd_rows):
    """In-memory CADD score table."""
    from genannot.models.scores import AlleleScore
    from genannot.scores.table import InMemoryScoreTable

    return InMemoryScoreTable(
        AlleleScore(
            chromosome=chrom,
            position=pos,
            reference_allele=ref,
            alternate_allele=alt,
            absolute_score=raw,
            scaled_score=phred,
        )
        for chrom, pos, ref, alt, raw, phred in cadd_rows
    )


@pytest.fixture
def populated_cache_dir(tmp_path, gene_location_lines, hpo_lines, omim_lines):
    """Cache directory already holding the three reference datasets."""
    from genannot.constants import GENE_LOCATIONS_CACHE_KEY, HPO_CACHE_KEY, OMIM_CACHE_KEY

    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    (cache_dir / GENE_LOCATIONS_CACHE_KEY).write_text("\n".join(gene_location_lines) + "\n")
    (cache_dir / HPO_CACHE_KEY).write_text("\n".join(hpo_lines) + "\n")
    (cache_dir / OMIM_CACHE_KEY).write_text("\n".join(omim_lines) + "\n")
    return cache_dir


@pytest.fixture
def omim_hpo_annotator(gene_location_lines, hpo_lines, omim_lines):
    """OMIM/HPO annotator built directly from the sample datasets."""
    from genannot.annotators.omim_hpo import OmimHpoAnnotator
    from genannot.index import GeneLocationIndex, build_hpo_index, build_omim_index
    from genannot.parsers import parse_gene_location_lines, parse_hpo_lines, parse_omim_lines

    return OmimHpoAnnotator(
        gene_locations=GeneLocationIndex(parse_gene_location_lines(gene_location_lines)),
        omim_index=build_omim_index(parse_omim_lines(omim_lines)),
        hpo_index=build_hpo_index(parse_hpo_lines(hpo_lines)),
    )


@pytest.fixture
def vcf_file(tmp_path):
    """Small VCF file with loci hitting the sample datasets."""
    path = tmp_path / "input.vcf"
    path.write_text(
        "##fileformat=VCFv4.1\n"
        "##contig=<ID=1>\n"
        "##contig=<ID=3>\n"
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        "1\t100\t.\tC\tT\t.\tPASS\t.\n"
        "3\t300\t.\tG\tT,A,C\t.\tPASS\t.\n"
        "1\t10600000\trs1\tA\tG\t.\tPASS\t.\n"
    )
    return path
