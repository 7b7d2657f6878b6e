"""
Design Service Client for StructAssist.

Sends analysis and design requests to the remote structural service. The
service is a black-box solver: this client only builds payloads, retries
transient failures and tags results with the combination they belong to.

Usage:
    client = DesignServiceClient(DesignServiceConfig.from_env())
    results = client.design_all_combinations(element)
"""

from dataclasses import replace
from typing import Optional, List, Dict, Any
import time
import logging

import httpx

from structassist.combinations.load_combinations import compute_load_combination
from structassist.core.data_models import CombinedLoad, LoadCombination, StructuralElement
from .config import DesignServiceConfig
from .design_payload import (
    build_analysis_payload,
    parse_analysis_output,
    transform_element_to_design_api,
)

logger = logging.getLogger(__name__)


class DesignServiceError(Exception):
    """Base exception for design service errors.

    Attributes:
        message: Error description
        status_code: HTTP status code (if applicable)
        response: Raw response body (if available)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (status: {self.status_code})"
        return self.message


class DesignServiceUnavailableError(DesignServiceError):
    """Raised for server errors (HTTP 5xx) or when retries are exhausted."""
    pass


class DesignServiceClient:
    """Client for the ``/analyse`` and ``/element`` endpoints."""

    def __init__(self, config: Optional[DesignServiceConfig] = None):
        self._config = config or DesignServiceConfig()

    @property
    def config(self) -> DesignServiceConfig:
        return self._config

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        """POST JSON with exponential backoff on server and transport errors.

        Raises:
            DesignServiceError: For 4xx responses or an unparseable body (not retried)
            DesignServiceUnavailableError: When all attempts fail
        """
        url = f"{self._config.base_url}{endpoint}"
        attempts = self._config.max_retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            try:
                with httpx.Client(timeout=self._config.timeout) as client:
                    response = client.post(
                        url,
                        json=payload,
                        headers={"Content-Type": "application/json", "Accept": "application/json"},
                    )

                if response.status_code >= 500:
                    raise DesignServiceUnavailableError(
                        f"Design service error at {endpoint}: {response.text}",
                        status_code=response.status_code,
                        response=response.text,
                    )
                if response.status_code >= 400:
                    raise DesignServiceError(
                        f"Design API request failed at {endpoint}: {response.text}",
                        status_code=response.status_code,
                        response=response.text,
                    )

                try:
                    return response.json()
                except ValueError as e:
                    raise DesignServiceError(
                        f"Invalid JSON response from {endpoint}: {e}",
                        status_code=response.status_code,
                        response=response.text,
                    )

            except DesignServiceUnavailableError as e:
                last_error = e
            except (httpx.TimeoutException, httpx.RequestError) as e:
                last_error = e

            if attempt < attempts - 1:
                delay = self._config.retry_base_delay * (2 ** attempt)
                logger.warning(
                    f"Design service request to {endpoint} failed "
                    f"(attempt {attempt + 1}/{attempts}), retrying in {delay:.1f}s: {last_error}"
                )
                time.sleep(delay)

        raise DesignServiceUnavailableError(
            f"Could not reach the design service at {url} after {attempts} attempts: {last_error}"
        ) from last_error

    def analyze_beam(
        self,
        element: StructuralElement,
        loads: List[CombinedLoad],
        elastic_modulus_gpa: float,
        second_moment: float,
        area: float,
    ) -> Dict[str, Any]:
        """Run a beam analysis and return the normalised output."""
        payload = build_analysis_payload(element, loads, elastic_modulus_gpa, second_moment, area)
        logger.info(f"Starting analysis for beam: {element.name}")
        return parse_analysis_output(self._post("/analyse", payload))

    def design_element(
        self,
        element: StructuralElement,
        combination: LoadCombination,
    ) -> Dict[str, Any]:
        """Design an element for one combination.

        Returns:
            Design service output tagged with ``combinationName`` and
            ``combinationType`` (plus ``loadCaseType`` for individual combinations)
        """
        payload = transform_element_to_design_api(element, combination)
        data = self._post("/element", payload)

        result = dict(data)
        result["combinationName"] = combination.name or f"Combination_{int(time.time() * 1000)}"
        if combination.combination_type is not None:
            result["combinationType"] = combination.combination_type.value
        if combination.is_individual:
            result["loadCaseType"] = combination.load_case_factors[0].load_case_type.value

        logger.info(f"Designed '{element.name}' for combination '{combination.name}'")
        return result

    def design_all_combinations(self, element: StructuralElement) -> List[Dict[str, Any]]:
        """Design an element for every active combination.

        Combinations without combined loads are skipped, and a combination
        whose design request fails is logged and skipped.

        Raises:
            DesignServiceError: If the element has no load combinations
        """
        if not element.load_combinations:
            raise DesignServiceError("No load combinations found for design")

        results: List[Dict[str, Any]] = []

        for combination in element.load_combinations:
            if not combination.active:
                continue

            computed = combination.computed_result
            if not computed:
                try:
                    computed = compute_load_combination(element.applied_loads, combination)
                except (TypeError, ValueError, AttributeError) as e:
                    logger.warning(f"Failed to compute results for combination {combination.name}: {e}")
                    continue

            if not computed:
                logger.warning(f"Skipping combination {combination.name}: no computed results")
                continue

            try:
                results.append(
                    self.design_element(element, replace(combination, computed_result=computed))
                )
            except DesignServiceError as e:
                logger.error(f"Design failed for combination {combination.name}: {e}")

        return results
