"""
Task Scheduler - Task API Client
Async HTTP client for the /api/tasks endpoints
"""

import os
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from constants import ClientMessages
from errors import TaskRequestError
from logging_config import get_logger
from schemas.tasks import Task, TaskFormData

logger = get_logger(__name__)

# Configuration
TASK_API_URL = os.getenv("TASK_API_URL", "http://localhost:3001/api").rstrip("/")
TASK_API_TIMEOUT = float(os.getenv("TASK_API_TIMEOUT", "10"))


class TaskAPIClient:
    """
    Thin wrapper over the task endpoints.

    Every method raises TaskRequestError with a fixed, per-operation message
    when the server is unreachable, answers with a non-2xx status, or answers
    with a body that is not a task payload.
    """

    def __init__(
        self,
        base_url: str = TASK_API_URL,
        timeout: float = TASK_API_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "TaskAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TaskRequestError(failure_message, details={"reason": str(e)}) from e

        if response.is_error:
            logger.error(f"{method} {url} returned {response.status_code}: {response.text}")
            raise TaskRequestError(
                failure_message,
                status_code=response.status_code,
                details=self._error_body(response),
            )
        return response

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"body": response.text}
        return body if isinstance(body, dict) else {"body": body}

    @staticmethod
    def _parse(response: httpx.Response, failure_message: str, many: bool = False) -> Any:
        """Decode a 2xx body into Task models"""
        try:
            body = response.json()
            if many:
                if not isinstance(body, list):
                    raise TypeError(f"expected a list, got {type(body).__name__}")
                return [Task.model_validate(item) for item in body]
            return Task.model_validate(body)
        except (ValueError, TypeError, PydanticValidationError) as e:
            logger.error(f"Unexpected response body for {response.request.method} {response.request.url}: {e}")
            raise TaskRequestError(
                failure_message,
                status_code=response.status_code,
                details={"reason": "invalid response body", "body": response.text[:200]},
            ) from e

    async def get_tasks(self) -> List[Task]:
        """GET /tasks"""
        response = await self._request("GET", "/tasks", ClientMessages.FETCH_FAILED)
        return self._parse(response, ClientMessages.FETCH_FAILED, many=True)

    async def create_task(self, data: Union[TaskFormData, Dict[str, Any]]) -> Task:
        """POST /tasks"""
        payload = data.to_payload() if isinstance(data, TaskFormData) else data
        response = await self._request("POST", "/tasks", ClientMessages.CREATE_FAILED, json=payload)
        return self._parse(response, ClientMessages.CREATE_FAILED)

    async def update_task(self, task_id: str, data: Union[TaskFormData, Dict[str, Any]]) -> Task:
        """PUT /tasks/{id} with a partial patch"""
        payload = data.to_payload() if isinstance(data, TaskFormData) else data
        response = await self._request("PUT", f"/tasks/{task_id}", ClientMessages.UPDATE_FAILED, json=payload)
        return self._parse(response, ClientMessages.UPDATE_FAILED)

    async def delete_task(self, task_id: str) -> None:
        """DELETE /tasks/{id}"""
        await self._request("DELETE", f"/tasks/{task_id}", ClientMessages.DELETE_FAILED)

    async def toggle_task(self, task_id: str) -> Task:
        """PATCH /tasks/{id}/toggle"""
        response = await self._request("PATCH", f"/tasks/{task_id}/toggle", ClientMessages.TOGGLE_FAILED)
        return self._parse(response, ClientMessages.TOGGLE_FAILED)
