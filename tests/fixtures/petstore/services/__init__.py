# Re-exported from a sibling namespace; must stay invisible to "petstore.services".
from petstore.services_legacy import LegacyService  # noqa: F401
