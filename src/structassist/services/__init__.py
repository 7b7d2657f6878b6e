"""
Remote structural service integration.

Components:
- Configuration: DesignServiceConfig (environment / .env)
- Payloads: design and analysis payload adapters
- Client: DesignServiceClient with retry/backoff
"""

from .config import DesignServiceConfig
from .design_payload import (
    ApiLoadCombination,
    build_analysis_payload,
    map_combination_to_api_format,
    parse_analysis_output,
    transform_element_to_design_api,
)
from .design_client import (
    DesignServiceClient,
    DesignServiceError,
    DesignServiceUnavailableError,
)

__all__ = [
    "DesignServiceConfig",
    "ApiLoadCombination",
    "build_analysis_payload",
    "map_combination_to_api_format",
    "parse_analysis_output",
    "transform_element_to_design_api",
    "DesignServiceClient",
    "DesignServiceError",
    "DesignServiceUnavailableError",
]
