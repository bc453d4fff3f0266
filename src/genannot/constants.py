"""Centralized constants for genannot.

This module consolidates the fixed names used across the codebase:
- Reference dataset locations and their cache keys
- Input record field names (VCF columns)
- Output field names for each annotator

Centralizing these keeps annotators, parsers and the CLI in agreement.
"""

# =============================================================================
# REFERENCE DATASETS
# =============================================================================
# Flat files fetched once through the ReferenceCache. The cache keys are fixed
# so an existing cache directory keeps working across releases.

GENE_LOCATIONS_URL = (
    "https://molgenis26.target.rug.nl/downloads/5gpm/GRCh37p13_HGNC_GeneLocations_noPatches.tsv"
)
GENE_LOCATIONS_CACHE_KEY = "HGNC_gene_locations_GRCH37.tsv"

HPO_DISEASES_TO_GENES_TO_PHENOTYPES_URL = (
    "http://compbio.charite.de/hudson/job/hpo.annotations.monthly/lastStableBuild/artifact/"
    "annotation/ALL_SOURCES_ALL_FREQUENCIES_diseases_to_genes_to_phenotypes.txt"
)
HPO_CACHE_KEY = "diseases_to_genes_to_phenotypes.txt"

OMIM_MORBIDMAP_URL = "https://data.omim.org/downloads/morbidmap"
OMIM_CACHE_KEY = "morbid_map"


# =============================================================================
# INPUT RECORD FIELDS
# =============================================================================
# Variant records follow VCF column naming.

CHROMOSOME = "#CHROM"
POSITION = "POS"
REFERENCE_ALLELE = "REF"
ALTERNATE_ALLELES = "ALT"

ALLELE_SEPARATOR = ","


# =============================================================================
# GENE LOCATIONS
# =============================================================================

# Padding (in bases) applied to both ends of a gene when matching a locus
GENE_WINDOW_TOLERANCE = 5

# Only primary assembly chromosomes are indexed (no Y, MT or patch contigs)
GENE_LOCATION_CHROMOSOME_PATTERN = r"[0-9]+|X"


# =============================================================================
# OMIM / HPO OUTPUT FIELDS
# =============================================================================

OMIM_CAUSAL_IDENTIFIER = "OMIM_Causal_ID"
OMIM_DISORDERS = "OMIM_Disorders"
OMIM_TYPE = "OMIM_Type"
OMIM_HGNC_IDENTIFIERS = "OMIM_HGNC_IDs"
OMIM_CYTOGENIC_LOCATION = "OMIM_Cytogenic_Location"
OMIM_ENTRY = "OMIM_Entry"

HPO_IDENTIFIERS = "HPO_IDs"
HPO_GENE_NAME = "HPO_Gene_Name"
HPO_DESCRIPTIONS = "HPO_Descriptions"
HPO_DISEASE_DATABASE = "HPO_Disease_Database"
HPO_DISEASE_DATABASE_ENTRY = "HPO_Disease_Database_Entry"
HPO_ENTREZ_ID = "HPO_Entrez_ID"


# =============================================================================
# CADD OUTPUT FIELDS
# =============================================================================

CADD_ABS = "CADD"
CADD_SCALED = "CADD_SCALED"


# =============================================================================
# CAPABILITY CHECK REASONS
# =============================================================================

MISSING_ATTRIBUTE_REASON = "missing required attribute"
WRONG_DATATYPE_REASON = "a required attribute has the wrong datatype"
