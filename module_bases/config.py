import os

# Number of basis indices inspected when both the basis and the family are infinite
PROBE_COUNT = int(os.getenv("MODULE_BASES_PROBE_COUNT", "32"))

# Number of family members scanned when an infinite family has no locate oracle
SEARCH_LIMIT = int(os.getenv("MODULE_BASES_SEARCH_LIMIT", "1024"))

LOG_LEVEL = os.getenv("MODULE_BASES_LOG_LEVEL", "WARNING")
