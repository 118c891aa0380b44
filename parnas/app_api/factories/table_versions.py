TABLE_V1 = "v1"
TABLE_FIRST_MATCH = "first_match"
TABLE_DRAFT = "draft"

ALLOWED_TABLE_VERSIONS = {TABLE_V1, TABLE_FIRST_MATCH, TABLE_DRAFT}
