"""saas-connector - resilient HTTP request layer for SaaS API connectors.

Builds provider requests (including the filter query language), sends them
with bounded retries on transient connection failures, and reports provider
errors as structured exceptions.
"""

__version__ = "1.0.0"

from saas_connector.config import Settings

__all__ = ["Settings", "__version__"]
