from abc import ABC, abstractmethod
from typing import Any


class AbstractGamepassAPI(ABC):
	"""Interface for clients fetching game pass data from the upstream API.

	Every method performs exactly one outbound request and returns the decoded
	JSON body untouched.
	"""

	@abstractmethod
	async def get_gamepass_details(self, gamepass_id: str) -> Any:
		"""Fetch the details document of a single game pass.

		Raises:
			UpstreamAppError: On network failure or non-2xx upstream status.
		"""
		...

	@abstractmethod
	async def get_user_inventory(self, user_id: str, *, cursor: str, limit: int) -> Any:
		"""Fetch a page of game passes owned by ``user_id``.

		Raises:
			UpstreamAppError: On network failure or non-2xx upstream status.
		"""
		...

	@abstractmethod
	async def get_user_creations(self, user_id: str, *, cursor: str, limit: int) -> Any:
		"""Fetch a page of non-archived game passes created by ``user_id``.

		Raises:
			UpstreamAppError: On network failure or non-2xx upstream status.
		"""
		...

	async def aclose(self) -> None:
		"""Release network resources. No-op by default."""
