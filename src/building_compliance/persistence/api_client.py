# File: src/building_compliance/persistence/api_client.py
import requests
from typing import Dict, Any, Optional, List, Tuple

from building_compliance.persistence.updater import UpdateResult
from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)


class ComplianceApiClient:
    """
    Client for the Building Compliance API.

    This client implements the element persistence collaborator used by the
    layer editor (update_element) and wraps the other element endpoints.

    Attributes:
        base_url: Base URL of the API
        api_key: API key for authentication
        headers: Headers to include in all requests
        timeout: Seconds to wait for each request
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0):
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API (e.g., "https://compliance.example.com")
            api_key: API key for authentication
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.headers = {"X-API-Key": api_key}
        self.timeout = timeout

    def _elements_url(self, project_id: str, type_id: str, space_id: str) -> str:
        return f"{self.base_url}/projects/{project_id}/types/{type_id}/spaces/{space_id}/elements"

    @staticmethod
    def _result(response: requests.Response) -> UpdateResult:
        """Turn any response into an UpdateResult, failures included."""
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.ok and isinstance(payload, dict) and "success" in payload:
            return UpdateResult.from_response(payload)

        detail = payload.get("detail") if isinstance(payload, dict) else None
        if isinstance(detail, dict):
            message = detail.get("detail")
        elif isinstance(detail, list):
            message = "; ".join(str(item.get("msg", item)) for item in detail)
        else:
            message = detail or (payload.get("message") if isinstance(payload, dict) else None)
        return UpdateResult(
            success=False,
            message=message or f"API returned status code {response.status_code}",
        )

    def check_connection(self) -> Tuple[bool, str]:
        """
        Check if the API is accessible.

        Returns:
            Tuple of (success, message)
        """
        try:
            response = requests.get(f"{self.base_url}/health", headers=self.headers, timeout=self.timeout)
            if response.status_code == 200:
                return True, "Connection successful"
            else:
                return False, f"API returned status code {response.status_code}"
        except requests.RequestException as e:
            return False, f"Connection error: {str(e)}"

    def update_element(
        self,
        project_id: str,
        type_id: str,
        space_id: str,
        element_id: str,
        element_data: Dict[str, Any],
    ) -> UpdateResult:
        """
        Store a complete element, layers included.

        Args:
            project_id: Project identifier
            type_id: Building type identifier
            space_id: Space identifier
            element_id: Element identifier
            element_data: Full element dictionary

        Returns:
            UpdateResult with the stored element on success

        Raises:
            requests.RequestException: If the API cannot be reached
        """
        url = f"{self._elements_url(project_id, type_id, space_id)}/{element_id}"
        logger.info(f"PUT {url}")
        response = requests.put(url, json=element_data, headers=self.headers, timeout=self.timeout)
        return self._result(response)

    def get_element(self, project_id: str, type_id: str, space_id: str, element_id: str) -> UpdateResult:
        """Fetch one element."""
        response = requests.get(
            f"{self._elements_url(project_id, type_id, space_id)}/{element_id}",
            headers=self.headers,
            timeout=self.timeout,
        )
        return self._result(response)

    def list_elements(self, project_id: str, type_id: str, space_id: str) -> List[Dict[str, Any]]:
        """
        List the elements of a space.

        Raises:
            requests.HTTPError: If the API request fails
        """
        response = requests.get(
            self._elements_url(project_id, type_id, space_id),
            headers=self.headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json().get("data", [])

    def create_element(
        self, project_id: str, type_id: str, space_id: str, element_data: Dict[str, Any]
    ) -> UpdateResult:
        """Create an element in a space."""
        response = requests.post(
            f"{self._elements_url(project_id, type_id, space_id)}/create",
            json=element_data,
            headers=self.headers,
            timeout=self.timeout,
        )
        return self._result(response)

    def delete_element(self, project_id: str, type_id: str, space_id: str, element_id: str) -> UpdateResult:
        """Delete an element."""
        response = requests.delete(
            f"{self._elements_url(project_id, type_id, space_id)}/{element_id}",
            headers=self.headers,
            timeout=self.timeout,
        )
        return self._result(response)

    def run_compliance_check(
        self, project_id: str, type_id: str, space_id: str, element_id: str
    ) -> Optional[Dict[str, Any]]:
        """
        Run the compliance check of an element.

        Returns:
            The compliance result dictionary, or None if the check failed
        """
        response = requests.post(
            f"{self._elements_url(project_id, type_id, space_id)}/{element_id}/compliance-check",
            headers=self.headers,
            timeout=self.timeout,
        )
        result = self._result(response)
        if not result.success:
            logger.warning(f"Compliance check failed for element {element_id}: {result.message}")
            return None
        return result.data
